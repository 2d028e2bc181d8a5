"""Factory for creating executors."""

from dbbench.executor import Executor

SUPPORTED_EXECUTORS = ["sqlite", "stdout"]


class ExecutorFactory:
    """Factory for creating executor instances."""

    @staticmethod
    def create_executor(kind: str, **kwargs) -> Executor:
        """Create an executor instance.

        Args:
            kind: Executor type ('sqlite' or 'stdout')
            **kwargs: Executor-specific configuration

        Returns:
            Executor instance

        Raises:
            ValueError: If the executor type is not supported
        """
        kind = kind.lower()
        if kind == "sqlite":
            from dbbench.executors.sqlite import SQLiteExecutor

            return SQLiteExecutor(**kwargs)
        elif kind == "stdout":
            from dbbench.executors.stdout import StdoutExecutor

            return StdoutExecutor(**kwargs)
        else:
            raise ValueError(
                f"Unsupported executor type: {kind}. "
                f"Supported types: {', '.join(SUPPORTED_EXECUTORS)}"
            )
