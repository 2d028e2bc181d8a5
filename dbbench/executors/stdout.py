import sys
from typing import List, Optional, TextIO

from dbbench.executor import Executor
from dbbench.protocol import Benchmark


class StdoutExecutor(Executor):
    """
    Dry-run executor that writes every statement to a stream.

    Useful to check what a template renders to before pointing it at a
    real database. It ships no benchmarks of its own.
    """

    def __init__(self, stream: Optional[TextIO] = None, path: Optional[str] = None):
        # The factory passes path to every executor
        self.stream = stream if stream is not None else sys.stdout

    def setup(self) -> None:
        pass

    def cleanup(self) -> None:
        self.stream.flush()

    def benchmarks(self) -> List[Benchmark]:
        return []

    def exec(self, statement: str) -> None:
        self.stream.write(statement.rstrip("\n") + "\n")
