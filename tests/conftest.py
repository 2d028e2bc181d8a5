from typing import List

import gevent
import pytest

from dbbench.cancellation import CancellationSource
from dbbench.executor import Executor
from dbbench.protocol import Benchmark, BenchType


class RecordingExecutor(Executor):
    """Executor that remembers every call instead of talking to a database."""

    def __init__(self, benchmarks: List[Benchmark] = None, yield_on_exec=False):
        self._benchmarks = benchmarks or []
        self.yield_on_exec = yield_on_exec
        self.statements: List[str] = []
        self.calls: List[str] = []

    def setup(self) -> None:
        self.calls.append("setup")

    def cleanup(self) -> None:
        self.calls.append("cleanup")

    def benchmarks(self) -> List[Benchmark]:
        return list(self._benchmarks)

    def exec(self, statement: str) -> None:
        self.calls.append("exec")
        self.statements.append(statement)
        if self.yield_on_exec:
            # Let other workers run, like a driver waiting on the network
            gevent.sleep(0)


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def interrupt():
    return CancellationSource()


@pytest.fixture
def loop_benchmark():
    return Benchmark(name="loop", type=BenchType.LOOP, stmt="{{ Iter }}")


@pytest.fixture
def once_benchmark():
    return Benchmark(name="once", type=BenchType.ONCE, stmt="{{ Iter }}")


@pytest.fixture
def make_executor():
    """Factory for executors with custom benchmarks or yielding behaviour."""
    return RecordingExecutor
