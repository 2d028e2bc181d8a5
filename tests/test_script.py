import pytest

from dbbench.protocol import BenchType
from dbbench.script import ScriptError, load_script, parse_script

SCRIPT = """
-- set up
\\name create
\\mode once
CREATE TABLE accounts (id INTEGER, balance INTEGER);

\\name inserts
\\mode loop
INSERT INTO accounts
VALUES ({{ Iter }}, {{ RandInt63n(1000) }});

\\name background
\\parallel true
SELECT COUNT(*) FROM accounts;
"""


def test_parse_script():
    benchmarks = parse_script(SCRIPT)

    assert [b.name for b in benchmarks] == ["create", "inserts", "background"]
    assert benchmarks[0].type == BenchType.ONCE
    assert benchmarks[1].type == BenchType.LOOP
    assert benchmarks[1].stmt == (
        "INSERT INTO accounts\nVALUES ({{ Iter }}, {{ RandInt63n(1000) }});"
    )
    assert benchmarks[2].parallel is True
    assert benchmarks[2].type == BenchType.LOOP


def test_statements_without_directives_get_default_names():
    benchmarks = parse_script("SELECT 1;\n\\mode once\nSELECT 2;\n")

    assert [b.name for b in benchmarks] == ["custom-1", "custom-2"]
    assert benchmarks[0].type == BenchType.LOOP
    assert benchmarks[1].type == BenchType.ONCE


def test_comments_and_blank_lines_are_ignored():
    benchmarks = parse_script("# comment\n\n-- another\nSELECT 1;\n")

    assert len(benchmarks) == 1
    assert benchmarks[0].stmt == "SELECT 1;"


def test_empty_script():
    assert parse_script("") == []
    assert parse_script("\\name unused\n") == []


def test_directives_are_case_insensitive():
    benchmarks = parse_script("\\Mode ONCE\nSELECT 1;")

    assert benchmarks[0].type == BenchType.ONCE


@pytest.mark.parametrize(
    "text, lineno, message",
    [
        ("\\mode sometimes\nSELECT 1;", 1, "unknown mode"),
        ("SELECT 1;\n\\repeat 3", 2, "unknown directive"),
        ("\\parallel maybe\nSELECT 1;", 1, "expected true or false"),
        ("\\name\nSELECT 1;", 1, "requires a value"),
        ("\\name a\nSELECT 1;\n\\name a\nSELECT 2;", 4, "duplicate"),
    ],
)
def test_invalid_scripts(text, lineno, message):
    with pytest.raises(ScriptError, match=message) as e:
        parse_script(text)

    assert e.value.lineno == lineno


def test_load_script(tmp_path):
    path = tmp_path / "bench.sql"
    path.write_text(SCRIPT)

    benchmarks = load_script(path)

    assert len(benchmarks) == 3
