import sys

import click
from rich.console import Console

from dbbench.cancellation import default_source
from dbbench.cli.option_groups import executor_options, output_options, run_options
from dbbench.cli.report import build_benchmarks_table, build_results_table
from dbbench.cli.validation import validate_script_callback
from dbbench.executors import ExecutorFactory, ScriptExecutor
from dbbench.logging import LoggingManager, init_logger
from dbbench.scheduler import Scheduler
from dbbench.suite import BenchmarkSuite, SuiteConfig
from dbbench.template import TemplateError
from dbbench.version import __version__ as DBBENCH_VERSION


@click.group()
@click.version_option(
    version=DBBENCH_VERSION,
    prog_name="dbbench",
    message="%(prog)s version %(version)s",
    help="Show the current version of dbbench and exit.",
)
@click.pass_context
def cli(ctx):
    """
    Main CLI entry point for dbbench.
    """
    pass


@click.command(context_settings={"show_default": True})
@executor_options
@run_options
@output_options
@click.pass_context
def run(
    ctx,
    executor_type,
    path,
    iterations,
    threads,
    run_names,
    script,
    sleep,
    noinit,
    noclean,
    seed,
    time_unit,
    log_dir,
):
    """
    Run the benchmarks of an executor or a custom script.
    """
    LoggingManager("run", log_dir=log_dir)
    logger = init_logger("dbbench.run")

    logger.info(f"👋 Welcome to dbbench {DBBENCH_VERSION}!")
    logger.info("Options you provided:")
    for key, value in ctx.params.items():
        if key == "script" and value is not None:
            value = [b.name for b in value]
        logger.info(f"{key}: {value}")

    if executor_type == "sqlite" and path == ":memory:":
        logger.warning(
            "Using an in-memory SQLite database, data is discarded after the run."
        )

    executor = ExecutorFactory.create_executor(executor_type, path=path)
    if script is not None:
        logger.info(f"📜 Loaded {len(script)} benchmark(s) from the script")
        executor = ScriptExecutor(executor, script)

    config = SuiteConfig(
        iterations=iterations,
        threads=threads,
        sleep=sleep,
        only=run_names,
        init=not noinit,
        clean=not noclean,
        seed=seed,
    )
    suite = BenchmarkSuite(
        executor, config, scheduler=Scheduler(default_source, seed=seed)
    )

    try:
        suite.select_benchmarks()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    try:
        with default_source.handle_signals():
            results = suite.run()
    except TemplateError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    Console().print(build_results_table(results, time_unit))
    logger.info("🎉 All benchmarks finished.")


@click.command(name="list")
@executor_options
@click.option(
    "--script",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    callback=validate_script_callback,
    help="Custom benchmark script to list instead of the executor's "
    "built-in benchmarks.",
)
@click.pass_context
def list_benchmarks(ctx, executor_type, path, script):
    """
    Show the benchmarks an executor or script would run.
    """
    LoggingManager("list")
    if script is not None:
        benchmarks = script
    else:
        executor = ExecutorFactory.create_executor(executor_type, path=path)
        benchmarks = executor.benchmarks()

    Console().print(build_benchmarks_table(benchmarks))


cli.add_command(run)
cli.add_command(list_benchmarks)

if __name__ == "__main__":
    cli()
