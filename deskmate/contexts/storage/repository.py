"""
Document repositories.

Every command follows the same discipline: get() the latest document, mutate it in
memory, put() the whole document back. Callers must re-read before each mutation;
nothing holds on to a document between invocations.

Known limitation: read-modify-write is not atomic across process crashes. A crash
between get() and put() loses the pending mutation. The temp-file write below only
guarantees the file is never left half-written.
"""

import copy
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from dotenv import load_dotenv

from deskmate.contexts.storage.document import default_document, migrate_document
from deskmate.contexts.storage.exceptions import PersistenceError
from deskmate.contexts.storage.logger import _log_debug, _log_error, _log_warning

load_dotenv()
DATA_FILE = Path(os.getenv("DESKMATE_DATA_FILE", "data/deskmate.json"))


class DocumentRepository(Protocol):
    """Whole-document load/save capability the contexts depend on."""

    def get(self) -> dict:
        """Return a fresh copy of the current document."""
        ...

    def put(self, document: dict) -> bool:
        """Persist the whole document. Returns False if it could not be saved."""
        ...


class JsonDocumentRepository:
    """
    Repository backed by a single JSON file.

    Read failures fall back to an empty default document and write failures are
    logged; neither is surfaced to the caller as an exception.
    """

    def __init__(self, path: Path = None):
        """
        Args:
            path: Document location. Defaults to DESKMATE_DATA_FILE from environment
        """
        self.path = Path(path) if path is not None else DATA_FILE

    def get(self) -> dict:
        try:
            document = self._read()
        except PersistenceError as e:
            _log_error(f"{e.message}; falling back to an empty document")
            return default_document()

        if document is None:
            return default_document()
        return migrate_document(document)

    def put(self, document: dict) -> bool:
        try:
            self._write(document)
        except PersistenceError as e:
            _log_error(e.message)
            _log_debug(str(e))
            return False
        return True

    def _read(self) -> Optional[dict]:
        """Load the raw document, or None if the file does not exist yet."""
        if not self.path.exists():
            _log_debug(f"No document at {self.path}, starting empty")
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        except (OSError, ValueError) as e:
            raise PersistenceError("Could not read document", self.path, e) from e

        if not isinstance(document, dict):
            raise PersistenceError(
                f"Document root must be an object, got {type(document).__name__}", self.path
            )
        return document

    def _write(self, document: dict) -> None:
        """Write to a temp file first, then move it over the document."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                suffix=".json", dir=self.path.parent, text=True
            )
        except OSError as e:
            raise PersistenceError("Could not prepare document write", self.path, e) from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, default=str)
            shutil.move(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            # Clean up temp file if write failed
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise PersistenceError("Could not write document", self.path, e) from e


class InMemoryDocumentRepository:
    """
    Repository that keeps the document in memory.

    Deep-copies on the way in and out, so callers observe the same value semantics
    as with the JSON file.
    """

    def __init__(self, initial: Optional[dict] = None):
        if initial is None:
            self._document = default_document()
        else:
            self._document = migrate_document(copy.deepcopy(initial))
        self.put_count = 0

    def get(self) -> dict:
        return copy.deepcopy(self._document)

    def put(self, document: dict) -> bool:
        if not isinstance(document, dict):
            _log_warning(f"Refusing to store non-object document ({type(document).__name__})")
            return False
        self._document = copy.deepcopy(document)
        self.put_count += 1
        return True
