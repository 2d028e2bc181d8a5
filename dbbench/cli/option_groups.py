import click

from dbbench.cli.validation import (
    validate_run_names,
    validate_script_callback,
    validate_time_unit,
)
from dbbench.executors.factory import SUPPORTED_EXECUTORS


# Group executor-related options
# NOTE: when adding new options, please add them at the top of the func, as
# the decorator works in reversed order
def executor_options(func):
    func = click.option(
        "--path",
        type=str,
        default=":memory:",
        envvar="DBBENCH_PATH",
        help="Database location. For sqlite a file path or ':memory:'.",
    )(func)
    func = click.option(
        "--type",
        "executor_type",
        type=click.Choice(SUPPORTED_EXECUTORS, case_sensitive=False),
        default="sqlite",
        envvar="DBBENCH_TYPE",
        help="The executor running the statements. 'stdout' only prints "
        "the rendered statements.",
    )(func)
    return func


# Group run-related options
def run_options(func):
    func = click.option(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random template functions. Each worker derives "
        "its own generator from it, so runs become reproducible.",
    )(func)
    func = click.option(
        "--noclean",
        is_flag=True,
        default=False,
        help="Do not clean up the executor after the benchmarks.",
    )(func)
    func = click.option(
        "--noinit",
        is_flag=True,
        default=False,
        help="Do not set up the executor before the benchmarks.",
    )(func)
    func = click.option(
        "--sleep",
        type=click.FloatRange(min=0.0),
        default=0.0,
        help="Seconds to sleep between benchmarks.",
    )(func)
    func = click.option(
        "--script",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        callback=validate_script_callback,
        help="""
            Custom benchmark script replacing the executor's built-in
            benchmarks.

            \b
            Directives:
            \\name <name>       start a benchmark called <name>
            \\mode once|loop    execute once or --iter times
            \\parallel true     do not wait for the benchmark
            """,
    )(func)
    func = click.option(
        "--run",
        "run_names",
        type=str,
        multiple=True,
        callback=validate_run_names,
        help="""
            Only run the named benchmarks.

            \b
            Example:
            --run inserts --run selects
            --run inserts,selects
            """,
    )(func)
    func = click.option(
        "--threads",
        type=click.IntRange(min=1),
        default=25,
        help="Number of concurrent workers per loop benchmark.",
    )(func)
    func = click.option(
        "--iter",
        "iterations",
        type=click.IntRange(min=0),
        default=1000,
        help="Number of iterations per loop benchmark, split across the "
        "workers.",
    )(func)
    return func


# Group output-related options
def output_options(func):
    func = click.option(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for storing dbbench.log. If not specified, the log "
        "is written to the current working directory.",
    )(func)
    func = click.option(
        "--time-unit",
        type=str,
        default="s",
        callback=validate_time_unit,
        help="Time unit for the elapsed times in the results table: s, ms or "
        "us. Spelled out names like 'milliseconds' are accepted too.",
    )(func)
    return func
