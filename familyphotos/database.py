"""JSON document store.

Every collection (users, a user's albums, an album's photo records) is one
JSON array on disk. Documents are read whole and rewritten whole; a
re-entrant lock per document path serializes read-modify-write sequences.
"""

import os
import threading
import weakref
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from familyphotos.config import settings
from familyphotos.errors import InternalError


class DocumentStore:
    """Reads and writes JSON list documents under a root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)
        # An entry lives only while some caller holds its lock
        self._locks: "weakref.WeakValueDictionary[Path, threading.RLock]" = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def _lock_for(self, path: Path) -> threading.RLock:
        key = Path(path).resolve()
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    @contextmanager
    def guard(self, path: Path) -> Iterator[None]:
        """Hold the document's lock for a whole read-modify-write."""
        with self._lock_for(path):
            yield

    def ensure(self, path: Path) -> None:
        """Create the document (and its directory) as an empty list if missing."""
        with self.guard(path):
            path.parent.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                path.write_text("[]")

    def read(self, path: Path, adapter: TypeAdapter) -> list[Any]:
        """Read and validate a document, creating it empty on first access."""
        with self.guard(path):
            self.ensure(path)
            raw = path.read_bytes()
        try:
            return adapter.validate_json(raw)
        except SchemaError as e:
            raise InternalError(f"Corrupt document {path.name}: {e.error_count()} invalid field(s)") from e

    def write(self, path: Path, items: Sequence[Any], adapter: TypeAdapter) -> None:
        """Rewrite a whole document through a temp file and an atomic replace."""
        data = adapter.dump_json(list(items), by_alias=True, indent=2)
        with self.guard(path):
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_name(f".{path.name}.tmp")
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)

    def append_guarded(self, path: Path, items: Sequence[Any], adapter: TypeAdapter) -> list[Any]:
        """Add items to the front of a document in one locked rewrite.

        Items are inserted one by one at the head, so the last item ends up
        first (newest first). Returns the updated document.
        """
        with self.guard(path):
            current = self.read(path, adapter)
            for item in items:
                current.insert(0, item)
            self.write(path, current, adapter)
            return current


store = DocumentStore(settings.uploads_dir)


def get_store() -> DocumentStore:
    """FastAPI dependency: the process-wide document store."""
    return store
