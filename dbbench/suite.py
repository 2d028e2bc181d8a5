"""Running all benchmarks of an executor one after another."""

from typing import List, Optional

import gevent
from pydantic import BaseModel, Field, field_validator

from dbbench.executor import Executor
from dbbench.logging import init_logger
from dbbench.protocol import Benchmark
from dbbench.scheduler import RunResult, Scheduler

logger = init_logger(__name__)


class SuiteConfig(BaseModel):
    """Settings for one execution of a benchmark suite."""

    iterations: int = Field(1000, ge=0, description="Iterations per loop benchmark.")
    threads: int = Field(25, ge=1, description="Concurrent workers per benchmark.")
    sleep: float = Field(
        0.0, ge=0.0, description="Seconds to pause between benchmarks."
    )
    only: Optional[List[str]] = Field(
        None, description="Names of the benchmarks to run, all when unset."
    )
    init: bool = Field(True, description="Call the executor's setup first.")
    clean: bool = Field(True, description="Call the executor's cleanup last.")
    seed: Optional[int] = Field(
        None, description="Seed for the random template functions."
    )

    @field_validator("only")
    def validate_only(cls, v):
        if v is None:
            return v
        names = [name.strip() for name in v if name.strip()]
        return names or None


class BenchmarkSuite:
    """
    Drives the benchmarks of an executor in order.

    Setup and cleanup of the executor wrap the whole suite. Parallel
    benchmarks are not waited for individually, but the suite waits for all
    of them before cleaning up. An interrupt stops the suite at the next
    benchmark boundary, cleanup still runs.
    """

    def __init__(
        self,
        executor: Executor,
        config: SuiteConfig,
        scheduler: Optional[Scheduler] = None,
    ):
        self.executor = executor
        self.config = config
        self.scheduler = (
            scheduler if scheduler is not None else Scheduler(seed=config.seed)
        )

    def select_benchmarks(self) -> List[Benchmark]:
        """
        Return the benchmarks to run, in the executor's order.

        Raises:
            ValueError: If a requested name is not a benchmark of the executor
        """
        benchmarks = self.executor.benchmarks()
        if self.config.only is None:
            return benchmarks

        known = {b.name for b in benchmarks}
        unknown = [name for name in self.config.only if name not in known]
        if unknown:
            raise ValueError(
                f"Unknown benchmark(s): {', '.join(unknown)}. "
                f"Available: {', '.join(b.name for b in benchmarks) or 'none'}"
            )
        wanted = set(self.config.only)
        return [b for b in benchmarks if b.name in wanted]

    def run(self) -> List[RunResult]:
        """Run the selected benchmarks and return their results in order."""
        benchmarks = self.select_benchmarks()
        results: List[RunResult] = []

        with self.scheduler.interrupt.register() as listener:
            if self.config.init:
                logger.info("🔧 Setting up executor")
                self.executor.setup()
            try:
                for index, benchmark in enumerate(benchmarks):
                    if listener.interrupted():
                        logger.info(
                            f"⏩ Interrupted, skipping {len(benchmarks) - index} "
                            "remaining benchmark(s)"
                        )
                        break
                    if index > 0 and self.config.sleep > 0:
                        gevent.sleep(self.config.sleep)

                    logger.info(f"🚀 Running benchmark {benchmark.name}")
                    result = self.scheduler.run(
                        self.executor,
                        benchmark,
                        self.config.iterations,
                        self.config.threads,
                    )
                    results.append(result)
                    if result.detached:
                        logger.info(f"Launched {benchmark.name} in the background")
                    else:
                        logger.info(
                            f"✅ {benchmark.name} finished in {result.elapsed:.6f}s"
                        )

                self.wait_detached(results)
            finally:
                # Detached runs keep using the executor until they finish
                gevent.joinall([r.task for r in results if r.detached])
                if self.config.clean:
                    logger.info("🧹 Cleaning up executor")
                    self.executor.cleanup()

        return results

    @staticmethod
    def wait_detached(results: List[RunResult]) -> None:
        pending = [r for r in results if r.detached]
        if not pending:
            return
        logger.info(f"⏳ Waiting for {len(pending)} background benchmark(s)")
        # Join every task before the first failure is re-raised
        gevent.joinall([r.task for r in pending])
        for result in pending:
            result.wait()
            logger.info(
                f"✅ {result.benchmark.name} finished in {result.total_elapsed:.6f}s"
            )
