"""Template driven execution of a single benchmark."""

import time
from functools import partial
from typing import List, Optional

import gevent
import numpy as np
from gevent import Greenlet

from dbbench.cancellation import (
    CancellationSource,
    InterruptListener,
    default_source,
)
from dbbench.distribution import partition
from dbbench.executor import Executor
from dbbench.logging import init_logger
from dbbench.protocol import Benchmark, BenchType, WorkRange
from dbbench.template import IterationContext, RandomSource, StatementTemplate

logger = init_logger(__name__)


class RunResult:
    """
    Outcome of :meth:`Scheduler.run`.

    ``elapsed`` is the time until ``run`` handed control back to its caller.
    For a parallel benchmark this only covers launching the detached task,
    the task itself keeps running. Call :meth:`wait` to join it, after which
    :attr:`total_elapsed` holds the task's own running time.
    """

    def __init__(
        self,
        benchmark: Benchmark,
        elapsed: float,
        task: Optional[Greenlet] = None,
    ):
        self.benchmark = benchmark
        self.elapsed = elapsed
        self.task = task
        self._finished_elapsed: Optional[float] = None

    @property
    def detached(self) -> bool:
        return self.task is not None

    @property
    def done(self) -> bool:
        return self.task is None or self.task.ready()

    @property
    def total_elapsed(self) -> Optional[float]:
        """Start to finish time of the work, None while a detached task runs."""
        if self.task is None:
            return self.elapsed
        if not self.task.ready():
            return None
        return self._finished_elapsed

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for a detached task to finish.

        Returns:
            True if the work has finished, False if the timeout expired

        Raises:
            Exception: Whatever the detached task raised
        """
        if self.task is None:
            return True
        self.task.join(timeout=timeout)
        if not self.task.ready():
            return False
        # Re-raises the error of a failed task
        self.task.get()
        return True

    def __repr__(self) -> str:
        return (
            f"RunResult(benchmark={self.benchmark.name!r}, elapsed={self.elapsed:.6f}, "
            f"detached={self.detached})"
        )


class Scheduler:
    """
    Runs benchmarks of an executor.

    Loop benchmarks are split across ``threads`` greenlets. Each greenlet
    owns a contiguous range of iterations, its own random generator and its
    own interrupt listener, and renders and executes one statement per
    iteration.

    Args:
        interrupt: Source of interrupts observed between iterations
        seed: Makes the random functions of every worker reproducible.
            Each worker derives its own child seed from it.
    """

    def __init__(
        self,
        interrupt: Optional[CancellationSource] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.interrupt = interrupt if interrupt is not None else default_source
        self.seed = seed

    def run(
        self,
        executor: Executor,
        benchmark: Benchmark,
        iterations: int = 1000,
        threads: int = 25,
    ) -> RunResult:
        """
        Run one benchmark.

        The template is compiled before the clock starts. Once benchmarks
        render a single statement with ``Iter=1``. Loop benchmarks execute
        ``iterations`` statements spread over ``threads`` workers. Parallel
        benchmarks are launched as a detached task and not waited for.

        Raises:
            TemplateSyntaxError: If the statement template cannot be parsed
            TemplateRenderError: If a statement of a non-parallel benchmark
                fails to render
            ValueError: If iterations or threads are out of range
        """
        if benchmark.type == BenchType.LOOP:
            if threads < 1:
                raise ValueError(f"threads must be at least 1, got {threads}")
            if iterations < 0:
                raise ValueError(f"iterations must not be negative, got {iterations}")

        template = StatementTemplate.compile(benchmark.stmt, name=benchmark.name)

        if benchmark.type == BenchType.ONCE:
            work = partial(self._once, executor, template)
        else:
            work = partial(self._loop, executor, template, iterations, threads)

        start = time.monotonic()
        if benchmark.parallel:
            result = RunResult(benchmark, 0.0)
            task = gevent.spawn(self._timed, work, result)
            result.task = task
            result.elapsed = time.monotonic() - start
            logger.debug(f"Launched {benchmark.name} as a detached task")
            return result

        work()
        return RunResult(benchmark, time.monotonic() - start)

    @staticmethod
    def _timed(work, result: RunResult) -> None:
        start = time.monotonic()
        try:
            work()
        finally:
            result._finished_elapsed = time.monotonic() - start

    def _random_sources(self, count: int) -> List[RandomSource]:
        if self.seed is None:
            return [RandomSource() for _ in range(count)]
        children = np.random.SeedSequence(self.seed).spawn(count)
        return [RandomSource(child) for child in children]

    def _once(self, executor: Executor, template: StatementTemplate) -> None:
        (source,) = self._random_sources(1)
        statement = template.render(IterationContext(1, source))
        executor.exec(statement)

    def _loop(
        self,
        executor: Executor,
        template: StatementTemplate,
        iterations: int,
        threads: int,
    ) -> None:
        ranges = partition(iterations, threads)
        sources = self._random_sources(threads)
        # Register every worker before any of them starts, so an interrupt
        # arriving while the first workers run reaches the later ones too
        listeners = [self.interrupt.register() for _ in range(threads)]

        workers = [
            gevent.spawn(self._work, executor, template, worker, *args)
            for worker, args in enumerate(zip(ranges, sources, listeners))
        ]
        try:
            gevent.joinall(workers, raise_error=True)
        finally:
            # Only reached with live workers when one of them failed
            gevent.killall([w for w in workers if not w.dead])
            for listener in listeners:
                listener.close()

    def _work(
        self,
        executor: Executor,
        template: StatementTemplate,
        worker: int,
        work: WorkRange,
        source: RandomSource,
        listener: InterruptListener,
    ) -> None:
        for i in work:
            if listener.interrupted():
                logger.info(
                    f"⏹️ Worker {worker} interrupted before iteration {i} of {work}"
                )
                return
            statement = template.render(IterationContext(i, source))
            executor.exec(statement)


_default_scheduler = Scheduler()


def run(
    executor: Executor,
    benchmark: Benchmark,
    iterations: int = 1000,
    threads: int = 25,
) -> RunResult:
    """Run a benchmark with the process-wide interrupt source."""
    return _default_scheduler.run(executor, benchmark, iterations, threads)
