import sqlite3
from typing import List, Optional

from gevent.lock import Semaphore

from dbbench.executor import Executor
from dbbench.logging import init_logger
from dbbench.protocol import Benchmark, BenchType

logger = init_logger(__name__)

TABLE_NAME = "dbbench_simple"


class SQLiteExecutor(Executor):
    """
    Runs statements against a SQLite database file.

    SQLite allows a single writer at a time, so statements are serialized
    through one shared connection. Failed statements are logged and counted,
    the benchmark carries on.
    """

    def __init__(self, path: str = ":memory:"):
        self.path = path
        self.num_errors = 0
        self.lock = Semaphore(value=1)  # Gevent-compatible lock
        self._conn: Optional[sqlite3.Connection] = None
        self._closed = False

    @property
    def conn(self) -> sqlite3.Connection:
        if self._closed:
            raise sqlite3.ProgrammingError(
                f"SQLite database {self.path} was closed by cleanup"
            )
        if self._conn is None:
            # Workers are greenlets and may be resumed on the hub's thread
            self._conn = sqlite3.connect(
                self.path, check_same_thread=False, isolation_level=None
            )
            logger.debug(f"Opened SQLite database {self.path}")
        return self._conn

    def setup(self) -> None:
        self._closed = False
        self.conn.execute(
            f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} "
            "(id INTEGER PRIMARY KEY, balance INTEGER NOT NULL)"
        )
        logger.info(f"Created table {TABLE_NAME} in {self.path}")

    def cleanup(self) -> None:
        self.conn.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
        logger.info(f"Dropped table {TABLE_NAME} in {self.path}")
        self.close()

    def close(self) -> None:
        """Close the connection, later statements fail until the next setup."""
        self._closed = True
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def benchmarks(self) -> List[Benchmark]:
        return [
            Benchmark(
                name="inserts",
                type=BenchType.LOOP,
                stmt=f"INSERT INTO {TABLE_NAME} (id, balance) "
                "VALUES({{ Iter }}, {{ RandInt63() }});",
            ),
            Benchmark(
                name="selects",
                type=BenchType.LOOP,
                stmt=f"SELECT * FROM {TABLE_NAME} WHERE id = {{{{ Iter }}}};",
            ),
            Benchmark(
                name="updates",
                type=BenchType.LOOP,
                stmt=f"UPDATE {TABLE_NAME} SET balance = {{{{ RandInt63() }}}} "
                "WHERE id = {{ Iter }};",
            ),
            Benchmark(
                name="deletes",
                type=BenchType.LOOP,
                stmt=f"DELETE FROM {TABLE_NAME} WHERE id = {{{{ Iter }}}};",
            ),
        ]

    def exec(self, statement: str) -> None:
        with self.lock:
            try:
                # executescript steps through every statement of a script chunk
                self.conn.executescript(statement)
            except sqlite3.Error as e:
                self.num_errors += 1
                logger.warning(f"Statement failed: {e}: {statement[:200]}")
