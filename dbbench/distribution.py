"""Splitting a number of iterations across a fixed number of workers."""

from typing import List

from dbbench.protocol import WorkRange


def work_range(iterations: int, threads: int, worker: int) -> WorkRange:
    """
    Compute the inclusive iteration range of one worker.

    Every worker gets ``iterations // threads`` consecutive indices and the
    last worker additionally absorbs the remainder. When there are fewer
    iterations than workers, all workers but the last get an empty range
    and the last worker runs everything.

    Args:
        iterations: Total number of iterations, must be >= 0
        threads: Number of workers, must be >= 1
        worker: Zero-based index of the worker

    Returns:
        WorkRange with 1-based inclusive bounds, possibly empty

    Raises:
        ValueError: If any argument is out of range
    """
    if threads < 1:
        raise ValueError(f"threads must be at least 1, got {threads}")
    if iterations < 0:
        raise ValueError(f"iterations must not be negative, got {iterations}")
    if not 0 <= worker < threads:
        raise ValueError(f"worker must be in [0, {threads}), got {worker}")

    base = iterations // threads
    start = base * worker + 1
    stop = base * (worker + 1)

    # Add the remainder of iterations to the last worker
    if worker == threads - 1:
        stop += iterations - stop

    return WorkRange(start=start, stop=stop)


def partition(iterations: int, threads: int) -> List[WorkRange]:
    """Return the work range of every worker, ordered by worker index."""
    return [work_range(iterations, threads, worker) for worker in range(threads)]
