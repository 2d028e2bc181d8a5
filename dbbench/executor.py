"""Interface a database (or any other system under test) has to implement."""

from abc import ABC, abstractmethod
from typing import List

from dbbench.protocol import Benchmark


class Executor(ABC):
    """Abstract base class for systems that run benchmark statements."""

    @abstractmethod
    def setup(self) -> None:
        """Prepare external resources, e.g. create tables."""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release the resources created by :meth:`setup`."""
        pass

    @abstractmethod
    def benchmarks(self) -> List[Benchmark]:
        """Return the benchmarks of this executor in execution order."""
        pass

    @abstractmethod
    def exec(self, statement: str) -> None:
        """
        Execute one rendered statement.

        Failures are handled by the implementation. Whatever it decides to
        do, the scheduler neither inspects nor retries the call.
        """
        pass
