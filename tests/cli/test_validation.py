import click
import pytest

from dbbench.cli.validation import (
    validate_run_names,
    validate_script_callback,
    validate_time_unit,
)


def test_validate_run_names():
    ctx = click.Context(click.Command("test"))

    assert validate_run_names(ctx, None, ()) is None
    assert validate_run_names(ctx, None, ("inserts", "selects,inserts")) == [
        "inserts",
        "selects",
    ]

    with pytest.raises(click.BadParameter):
        validate_run_names(ctx, None, (" , ",))


def test_validate_script_callback(tmp_path):
    ctx = click.Context(click.Command("test"))
    path = tmp_path / "bench.sql"

    assert validate_script_callback(ctx, None, None) is None

    path.write_text("\\name one\nSELECT 1;\n")
    benchmarks = validate_script_callback(ctx, None, str(path))
    assert [b.name for b in benchmarks] == ["one"]

    path.write_text("\\bogus x\n")
    with pytest.raises(click.BadParameter) as exc:
        validate_script_callback(ctx, None, str(path))
    assert "unknown directive" in str(exc.value)


def test_validate_time_unit():
    assert validate_time_unit(None, None, "MS") == "ms"

    with pytest.raises(click.BadParameter):
        validate_time_unit(None, None, "minutes")

