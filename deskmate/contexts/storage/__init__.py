"""
Storage Context

Responsibilities:
- Defines the canonical shape of the persisted document
- Migrates documents written by older versions to the current schema
- Loads and saves the whole document (JSON file or in-memory)

Owns: Document schema, schema migrations, durability of the document
Never: Interprets reminders, skills or attendance semantics
"""

from deskmate.contexts.storage.document import (
    SCHEMA_VERSION,
    default_document,
    migrate_document,
)
from deskmate.contexts.storage.exceptions import PersistenceError
from deskmate.contexts.storage.repository import (
    DocumentRepository,
    InMemoryDocumentRepository,
    JsonDocumentRepository,
)

__all__ = [
    "SCHEMA_VERSION",
    "default_document",
    "migrate_document",
    "PersistenceError",
    "DocumentRepository",
    "InMemoryDocumentRepository",
    "JsonDocumentRepository",
]
