import sqlite3

import pytest

from dbbench.executors.sqlite import TABLE_NAME, SQLiteExecutor
from dbbench.scheduler import Scheduler


@pytest.fixture
def sqlite_executor(tmp_path):
    executor = SQLiteExecutor(path=str(tmp_path / "bench.db"))
    yield executor
    executor.close()


def count_rows(executor):
    return executor.conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]


def test_builtin_benchmarks(sqlite_executor):
    names = [b.name for b in sqlite_executor.benchmarks()]

    assert names == ["inserts", "selects", "updates", "deletes"]


def test_benchmarks_against_database(sqlite_executor, interrupt):
    scheduler = Scheduler(interrupt, seed=42)
    benchmarks = {b.name: b for b in sqlite_executor.benchmarks()}
    sqlite_executor.setup()

    scheduler.run(sqlite_executor, benchmarks["inserts"], iterations=20, threads=4)
    assert count_rows(sqlite_executor) == 20
    ids = [
        row[0]
        for row in sqlite_executor.conn.execute(f"SELECT id FROM {TABLE_NAME}")
    ]
    assert sorted(ids) == list(range(1, 21))

    scheduler.run(sqlite_executor, benchmarks["selects"], iterations=20, threads=4)
    scheduler.run(sqlite_executor, benchmarks["updates"], iterations=20, threads=4)
    scheduler.run(sqlite_executor, benchmarks["deletes"], iterations=10, threads=2)

    assert count_rows(sqlite_executor) == 10
    assert sqlite_executor.num_errors == 0


def test_failed_statements_are_counted(sqlite_executor):
    sqlite_executor.setup()

    sqlite_executor.exec(f"INSERT INTO {TABLE_NAME} (id, balance) VALUES (1, 1);")
    sqlite_executor.exec(f"INSERT INTO {TABLE_NAME} (id, balance) VALUES (1, 2);")
    sqlite_executor.exec("SELECT * FROM missing_table;")

    assert sqlite_executor.num_errors == 2
    assert count_rows(sqlite_executor) == 1


def test_exec_runs_every_statement_of_a_chunk(sqlite_executor):
    sqlite_executor.setup()

    sqlite_executor.exec(
        f"INSERT INTO {TABLE_NAME} (id, balance) VALUES (1, 1);\n"
        f"INSERT INTO {TABLE_NAME} (id, balance) VALUES (2, 1);"
    )

    assert count_rows(sqlite_executor) == 2


def test_cleanup_drops_table_and_closes(tmp_path):
    path = str(tmp_path / "bench.db")
    executor = SQLiteExecutor(path=path)
    executor.setup()
    executor.cleanup()

    assert executor._conn is None
    with sqlite3.connect(path) as conn:
        tables = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()
    assert tables == []


def test_exec_after_cleanup_fails_without_reconnecting(tmp_path):
    executor = SQLiteExecutor(path=str(tmp_path / "bench.db"))
    executor.setup()
    executor.cleanup()

    executor.exec(f"SELECT * FROM {TABLE_NAME};")

    assert executor.num_errors == 1
    assert executor._conn is None


def test_setup_reopens_after_cleanup(tmp_path):
    executor = SQLiteExecutor(path=str(tmp_path / "bench.db"))
    executor.setup()
    executor.cleanup()

    executor.setup()
    executor.exec(f"INSERT INTO {TABLE_NAME} (id, balance) VALUES (1, 1);")

    assert executor.num_errors == 0
    assert count_rows(executor) == 1
    executor.close()
