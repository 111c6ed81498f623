"""
SQLite identifier store - identifiers as 16-byte primary keys

Registers a ``ULID`` column type with the sqlite3 module: Identifiers are
written as 16-byte BLOBs and read back as Identifiers. SQLite compares BLOBs
with memcmp, which is exactly the identifier order, so the primary-key index
doubles as a time index and ``ORDER BY id`` returns records in creation
order.

Fun fact: SQLite has no native UUID type at all. Declaring a column as
``ULID`` just gives it NUMERIC affinity, which leaves BLOB values untouched!
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ulidia.core.comparator import lower_bound, upper_bound
from ulidia.core.generator import Generator
from ulidia.core.models import Identifier
from ulidia.kernel.errors import DuplicateIdentifier, StorageError
from ulidia.kernel.logging import LogOperation, get_logger
from ulidia.kernel.metrics import records_written_total
from ulidia.kernel.retry import is_lock_contention, retry_on_sqlite_lock

logger = get_logger(__name__)

COLUMN_TYPE = "ULID"


def register_sqlite_types() -> None:
    """
    Teach sqlite3 to store and load Identifiers

    Adapters are process-wide. Connections must be opened with
    ``detect_types=sqlite3.PARSE_DECLTYPES`` for the converter to apply.
    """
    sqlite3.register_adapter(Identifier, bytes)
    sqlite3.register_converter(COLUMN_TYPE, Identifier.from_bytes)


class SQLiteUlidStore:
    """
    Append-mostly record store keyed by identifiers

    Schema:
    - records table: ``id ULID PRIMARY KEY``, ``payload TEXT``
    - the primary-key index serves time-range scans
    """

    def __init__(self, db_path: str | Path, generator: Generator | None = None) -> None:
        """
        Initialize store with SQLite database

        Args:
            db_path: Path to SQLite database file
            generator: Identifier source for inserts without an explicit id

        Raises:
            StorageError: the database file cannot be opened or initialized
        """
        self.db_path = Path(db_path)
        self.generator = generator or Generator()
        register_sqlite_types()
        try:
            self._initialize_schema()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

    @retry_on_sqlite_lock()
    def _initialize_schema(self) -> None:
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS records (
                    id {COLUMN_TYPE} PRIMARY KEY NOT NULL,
                    payload TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(str(self.db_path), detect_types=sqlite3.PARSE_DECLTYPES)
        try:
            yield conn
        finally:
            conn.close()

    @retry_on_sqlite_lock()
    def insert(self, payload: str, identifier: Identifier | None = None) -> Identifier:
        """
        Insert a record, generating its identifier unless one is given

        Returns:
            The record's identifier

        Raises:
            DuplicateIdentifier: identifier already present
            StorageError: on other database errors
            sqlite3.OperationalError: database still locked after retries
        """
        identifier = identifier or self.generator.generate()
        with LogOperation(logger, "insert_record", id=str(identifier)):
            with self._connect() as conn:
                try:
                    conn.execute(
                        "INSERT INTO records (id, payload) VALUES (?, ?)",
                        (identifier, payload),
                    )
                    conn.commit()
                except sqlite3.IntegrityError as e:
                    conn.rollback()
                    raise DuplicateIdentifier(str(identifier)) from e
                except sqlite3.Error as e:
                    conn.rollback()
                    if is_lock_contention(e):
                        raise
                    raise StorageError(f"Failed to insert record: {e}") from e
        records_written_total.inc()
        return identifier

    @retry_on_sqlite_lock()
    def get(self, identifier: Identifier) -> str | None:
        """Payload stored under ``identifier``, or None"""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT payload FROM records WHERE id = ?", (identifier,)
            ).fetchone()
        return row[0] if row else None

    @retry_on_sqlite_lock()
    def scan(
        self,
        since_ms: int | None = None,
        until_ms: int | None = None,
        limit: int | None = None,
    ) -> list[tuple[Identifier, str]]:
        """
        Records in identifier order, optionally bounded by creation time

        Args:
            since_ms: Inclusive lower bound, ms since epoch
            until_ms: Inclusive upper bound, ms since epoch
            limit: Maximum number of records
        """
        clauses = []
        params: list[object] = []
        if since_ms is not None:
            clauses.append("id >= ?")
            params.append(lower_bound(since_ms))
        if until_ms is not None:
            clauses.append("id <= ?")
            params.append(upper_bound(until_ms))

        query = "SELECT id, payload FROM records"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY id"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with LogOperation(logger, "scan_records", since_ms=since_ms, until_ms=until_ms):
            with self._connect() as conn:
                return [(row[0], row[1]) for row in conn.execute(query, params)]

    @retry_on_sqlite_lock()
    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM records").fetchone()[0]
