from typing import List

from dbbench.executor import Executor
from dbbench.protocol import Benchmark


class ScriptExecutor(Executor):
    """Runs benchmarks loaded from a script on top of another executor."""

    def __init__(self, base: Executor, benchmarks: List[Benchmark]):
        self.base = base
        self._benchmarks = list(benchmarks)

    def setup(self) -> None:
        self.base.setup()

    def cleanup(self) -> None:
        self.base.cleanup()

    def benchmarks(self) -> List[Benchmark]:
        return list(self._benchmarks)

    def exec(self, statement: str) -> None:
        self.base.exec(statement)
