"""
Custom benchmark scripts.

A script is plain text with backslash directives that start a new
benchmark or change its settings::

    \\name create
    \\mode once
    CREATE TABLE accounts (id INTEGER, balance INTEGER);

    \\name inserts
    \\mode loop
    INSERT INTO accounts VALUES ({{ Iter }}, {{ RandInt63n(1000) }});

Every other non-empty line is part of the current statement. Lines
starting with ``--`` or ``#`` are comments.
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from dbbench.protocol import Benchmark, BenchType

DIRECTIVE_PATTERN = r"^\\(?P<directive>[A-Za-z]+)(?:\s+(?P<value>.*?))?\s*$"
TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


class ScriptError(ValueError):
    """A benchmark script could not be parsed."""

    def __init__(self, lineno: int, message: str):
        self.lineno = lineno
        super().__init__(f"line {lineno}: {message}")


class _PendingBenchmark:
    def __init__(self, default_name: str):
        self.name: Optional[str] = None
        self.default_name = default_name
        self.type = BenchType.LOOP
        self.parallel = False
        self.lines: List[str] = []
        self.first_lineno = 0

    def build(self) -> Benchmark:
        return Benchmark(
            name=self.name or self.default_name,
            type=self.type,
            parallel=self.parallel,
            stmt="\n".join(self.lines),
        )


def _parse_bool(value: str, lineno: int) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ScriptError(lineno, f"expected true or false, got '{value}'")


def parse_script(text: str) -> List[Benchmark]:
    """
    Parse the benchmarks contained in a script.

    Raises:
        ScriptError: On unknown directives, invalid values, duplicate names
            or a directive that is missing its value
    """
    benchmarks: List[Benchmark] = []
    current = _PendingBenchmark("custom-1")

    def finish():
        nonlocal current
        if current.lines:
            benchmark = current.build()
            if any(b.name == benchmark.name for b in benchmarks):
                raise ScriptError(
                    current.first_lineno,
                    f"duplicate benchmark name '{benchmark.name}'",
                )
            benchmarks.append(benchmark)
        current = _PendingBenchmark(f"custom-{len(benchmarks) + 1}")

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("--") or line.startswith("#"):
            continue

        match = re.match(DIRECTIVE_PATTERN, line)
        if match is None:
            if not current.lines:
                current.first_lineno = lineno
            current.lines.append(raw_line.rstrip())
            continue

        # A directive after statement text starts the next benchmark
        if current.lines:
            finish()

        directive = match.group("directive").lower()
        value = match.group("value")
        if not value:
            raise ScriptError(lineno, f"directive \\{directive} requires a value")

        if directive == "name":
            current.name = value
        elif directive == "mode":
            try:
                current.type = BenchType(value.lower())
            except ValueError:
                raise ScriptError(
                    lineno, f"unknown mode '{value}', expected once or loop"
                ) from None
        elif directive == "parallel":
            current.parallel = _parse_bool(value, lineno)
        else:
            raise ScriptError(lineno, f"unknown directive \\{directive}")

    finish()
    return benchmarks


def load_script(path: Union[str, Path]) -> List[Benchmark]:
    """Load the benchmarks of a script file."""
    with open(path, "r") as f:
        return parse_script(f.read())
