"""Persistence layer for stored job descriptions (SQLAlchemy).

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Data access
    - DocumentRepository: queries and updates on the job_descriptions table
    - SqlDocumentStore: session-per-call store used by the maintenance pipeline

    # Exceptions
    - PersistenceError, DatabaseConnectionError, RecordNotFoundError, DataIntegrityError

Example usage:
    >>> from jobdesc.persistence import init_database, get_session, DocumentRepository
    >>> init_database("sqlite:///./data/job_descriptions.db")
    >>> with get_session() as session:
    ...     record = DocumentRepository(session).get("job-4821")
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)
from .repositories import DocumentRepository
from .schema import DocumentModel
from .store import SqlDocumentStore

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Data access
    "DocumentModel",
    "DocumentRepository",
    "SqlDocumentStore",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
]
