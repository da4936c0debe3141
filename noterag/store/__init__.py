"""Note persistence."""

from noterag.store.factory import get_note_store
from noterag.store.sqlite import SQLiteNoteStore

__all__ = ["SQLiteNoteStore", "get_note_store"]
