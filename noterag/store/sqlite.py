"""SQLite note store.

Each note is one row holding its title, content and JSON-encoded
embedding, so a note and its embedding are always written together.
"""

from __future__ import annotations

import asyncio
import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

import structlog

from noterag.embed.codec import decode_embedding, encode_embedding
from noterag.errors import IntegrityError, StorageError
from noterag.models.note import Note, StoredNote

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SCHEMA = """
CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    embedding_json TEXT NOT NULL
)
"""


class SQLiteNoteStore:
    """Note store backed by a SQLite file.

    A connection is opened per operation and closed when it ends. Blocking
    calls run in a worker thread; writes are serialized by a lock while
    reads may run concurrently.
    """

    def __init__(self, db_path: str | Path, timeout: float = 30.0):
        """Initialize store.

        Args:
            db_path: Path to the database file (``:memory:`` is not supported
                since every operation opens its own connection)
            timeout: Seconds to wait for a locked database
        """
        self._db_path = Path(db_path)
        self._timeout = timeout
        self._write_lock = asyncio.Lock()

    @property
    def db_path(self) -> Path:
        """Get the database path."""
        return self._db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation."""
        try:
            conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database {self._db_path}: {e}") from e
        try:
            yield conn
        finally:
            conn.close()

    async def _run(self, func: Callable[[], T]) -> T:
        return await asyncio.to_thread(func)

    async def initialize(self) -> None:
        """Create the database file and table if missing."""

        def _init() -> None:
            try:
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Could not create database directory: {e}") from e
            with self._connect() as conn:
                try:
                    conn.execute(SCHEMA)
                    conn.commit()
                except sqlite3.Error as e:
                    raise StorageError(f"Could not create notes table: {e}") from e

        async with self._write_lock:
            await self._run(_init)
        logger.info("note_store_initialized", db_path=str(self._db_path))

    async def save(self, title: str, content: str, embedding: list[float]) -> int:
        """Insert a note with its embedding in a single statement.

        Returns:
            The new note id

        Raises:
            StorageError: If the embedding cannot be encoded or the write fails
        """
        try:
            embedding_json = encode_embedding(embedding)
        except ValueError as e:
            raise StorageError(f"Refusing to store invalid embedding: {e}") from e

        def _save() -> int:
            with self._connect() as conn:
                try:
                    with conn:
                        cursor = conn.execute(
                            "INSERT INTO notes (title, content, embedding_json) "
                            "VALUES (?, ?, ?)",
                            (title, content, embedding_json),
                        )
                except sqlite3.Error as e:
                    raise StorageError(f"Could not save note: {e}") from e
                return cursor.lastrowid

        async with self._write_lock:
            note_id = await self._run(_save)

        logger.debug("note_saved", note_id=note_id, dimension=len(embedding))
        return note_id

    async def list(self) -> list[Note]:
        """Return all notes in insertion order, without embeddings."""

        def _list() -> list[Note]:
            with self._connect() as conn:
                try:
                    rows = conn.execute(
                        "SELECT id, title, content FROM notes ORDER BY id"
                    ).fetchall()
                except sqlite3.Error as e:
                    raise StorageError(f"Could not list notes: {e}") from e
            return [Note(id=row[0], title=row[1], content=row[2]) for row in rows]

        return await self._run(_list)

    async def all_with_embeddings(self) -> list[StoredNote]:
        """Return every note whose embedding can be decoded.

        Rows with an undecodable embedding are skipped and logged, so a
        single corrupt record does not break retrieval for the rest.
        """

        def _fetch() -> list[tuple]:
            with self._connect() as conn:
                try:
                    return conn.execute(
                        "SELECT id, title, content, embedding_json "
                        "FROM notes ORDER BY id"
                    ).fetchall()
                except sqlite3.Error as e:
                    raise StorageError(f"Could not read notes: {e}") from e

        rows = await self._run(_fetch)

        entries: list[StoredNote] = []
        for note_id, title, content, embedding_json in rows:
            try:
                embedding = decode_embedding(embedding_json)
            except IntegrityError as e:
                logger.error(
                    "corrupt_embedding_skipped",
                    note_id=note_id,
                    error=str(e),
                )
                continue
            entries.append(
                StoredNote(
                    note=Note(id=note_id, title=title, content=content),
                    embedding=embedding,
                )
            )

        return entries

    async def delete(self, note_id: int) -> None:
        """Delete a note. Deleting a missing id is a no-op."""

        def _delete() -> int:
            with self._connect() as conn:
                try:
                    with conn:
                        cursor = conn.execute(
                            "DELETE FROM notes WHERE id = ?", (note_id,)
                        )
                except sqlite3.Error as e:
                    raise StorageError(f"Could not delete note {note_id}: {e}") from e
                return cursor.rowcount

        async with self._write_lock:
            deleted = await self._run(_delete)

        logger.debug("note_deleted", note_id=note_id, existed=deleted > 0)

    async def count(self) -> int:
        """Return the number of stored notes."""

        def _count() -> int:
            with self._connect() as conn:
                try:
                    return conn.execute("SELECT COUNT(*) FROM notes").fetchone()[0]
                except sqlite3.Error as e:
                    raise StorageError(f"Could not count notes: {e}") from e

        return await self._run(_count)
