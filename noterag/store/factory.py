"""Note store factory."""

from noterag.config import StorageSettings, get_settings
from noterag.store.sqlite import SQLiteNoteStore


def get_note_store(config: StorageSettings | None = None) -> SQLiteNoteStore:
    """Create a note store from storage configuration.

    The store is not initialized; call ``initialize()`` before use.
    """
    config = config or get_settings().storage
    return SQLiteNoteStore(db_path=config.db_path)
