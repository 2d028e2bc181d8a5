import click

from dbbench.script import ScriptError, load_script
from dbbench.time_units import TimeUnitConverter


# -------------------------
# General Validation Functions
# -------------------------
def validate_run_names(ctx, param, value):
    """Flatten repeated and comma separated --run values into one list."""
    if not value:
        return None
    names = []
    for item in value:
        for name in item.split(","):
            name = name.strip()
            if name and name not in names:
                names.append(name)
    if not names:
        raise click.BadParameter("At least one benchmark name is required.")
    return names


def validate_script_callback(ctx, param, value):
    """Load the script eagerly so syntax problems surface as usage errors."""
    if value is None:
        return None
    try:
        return load_script(value)
    except ScriptError as e:
        raise click.BadParameter(f"Invalid benchmark script {value}: {e}") from e


def validate_time_unit(ctx, param, value):
    try:
        return TimeUnitConverter.validate_unit(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

