"""Rendering of benchmark results for the terminal."""

from typing import List

from rich.table import Table

from dbbench.protocol import Benchmark
from dbbench.scheduler import RunResult
from dbbench.time_units import TimeUnitConverter


def build_results_table(results: List[RunResult], time_unit: str = "s") -> Table:
    """
    Build a table with one row per executed benchmark.

    Detached benchmarks show the time spent launching them and, once
    finished, their own running time.
    """
    table = Table(title="Benchmark Results")
    table.add_column("Benchmark", style="cyan")
    table.add_column("Mode")
    table.add_column(
        TimeUnitConverter.get_unit_label("Elapsed", time_unit), justify="right"
    )
    table.add_column(
        TimeUnitConverter.get_unit_label("Completed", time_unit), justify="right"
    )

    for result in results:
        mode = result.benchmark.type.value
        if result.detached:
            mode += " (parallel)"
        table.add_row(
            result.benchmark.name,
            mode,
            TimeUnitConverter.format_elapsed(result.elapsed, time_unit),
            TimeUnitConverter.format_elapsed(result.total_elapsed, time_unit),
        )
    return table


def build_benchmarks_table(benchmarks: List[Benchmark]) -> Table:
    table = Table(title="Benchmarks")
    table.add_column("Benchmark", style="cyan")
    table.add_column("Mode")
    table.add_column("Parallel")
    table.add_column("Statement")
    for benchmark in benchmarks:
        table.add_row(
            benchmark.name,
            benchmark.type.value,
            "yes" if benchmark.parallel else "no",
            benchmark.stmt,
        )
    return table
