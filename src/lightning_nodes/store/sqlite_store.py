"""SQLite-backed node snapshot store."""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from pydantic import ValidationError

from lightning_nodes.config import MEMORY_DATABASE, parse_database_url
from lightning_nodes.errors import StorageError
from lightning_nodes.models.node import Node
from lightning_nodes.store.base import NodeStore

logger = logging.getLogger(__name__)


class SqliteNodeStore(NodeStore):
    """
    SQLite store holding one row per node, keyed by public_key.
    Opens a connection per operation; replace_all runs in a single transaction.
    File databases use WAL so readers keep seeing the previous snapshot during a replace.
    """

    def __init__(self, db_path: str | Path = "nodes.db", *, ensure_schema: bool = True):
        self._db_path = str(db_path)
        self._uri: Optional[str] = None
        self._anchor: Optional[sqlite3.Connection] = None
        if self._db_path == MEMORY_DATABASE:
            # A named shared-cache database lives as long as one connection stays open
            self._uri = f"file:lightning_nodes_{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._anchor = sqlite3.connect(self._uri, uri=True, check_same_thread=False)
        if ensure_schema:
            self._ensure_schema()

    @classmethod
    def from_url(cls, database_url: str) -> "SqliteNodeStore":
        """Open the store named by a DATABASE_URL, creating the file and schema if absent."""
        db_path = parse_database_url(database_url)
        if db_path != MEMORY_DATABASE:
            try:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create database directory for {db_path}: {e}") from e
        store = cls(db_path)
        logger.info("Node store ready at %s", db_path)
        return store

    @property
    def is_memory(self) -> bool:
        return self._uri is not None

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            if self._uri:
                conn = sqlite3.connect(self._uri, uri=True)
            else:
                conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        try:
            with self._connection() as conn:
                if not self.is_memory:
                    conn.execute("PRAGMA journal_mode=WAL")
                conn.executescript(schema_path.read_text())
        except sqlite3.Error as e:
            raise StorageError(f"Failed to initialize schema in {self._db_path}: {e}") from e

    def _row_to_node(self, row: sqlite3.Row) -> Node:
        try:
            return Node(
                public_key=row["public_key"],
                alias=row["alias"] or "",
                capacity=row["capacity"],
                first_seen=row["first_seen"],
            )
        except ValidationError as e:
            raise StorageError(f"Corrupt node row {row['public_key']!r}: {e}") from e

    def list_all(self) -> list[Node]:
        """Return every stored node."""
        try:
            with self._connection() as conn:
                rows = conn.execute(
                    "SELECT public_key, alias, capacity, first_seen FROM nodes"
                ).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list nodes: {e}") from e
        return [self._row_to_node(r) for r in rows]

    def replace_all(self, nodes: Sequence[Node]) -> None:
        """Delete all rows and insert the given nodes; nothing is committed on failure."""
        rows = [(n.public_key, n.alias, n.capacity, n.first_seen) for n in nodes]
        try:
            with self._connection() as conn:
                conn.execute("DELETE FROM nodes")
                conn.executemany(
                    "INSERT INTO nodes (public_key, alias, capacity, first_seen) VALUES (?, ?, ?, ?)",
                    rows,
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to replace nodes: {e}") from e
        logger.debug("Replaced node snapshot with %d rows", len(rows))

    def close(self) -> None:
        """Release the in-memory database, if any. File databases need no cleanup."""
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None
