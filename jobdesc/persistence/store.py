"""Storage collaborator used by the maintenance pipeline.

Each call opens its own session, so a failed save rolls back only that
document.
"""

from typing import List, Optional

from jobdesc.domain.models import DocumentRecord

from .database import get_session
from .repositories import DocumentRepository


class SqlDocumentStore:
    """DocumentStore backed by the SQLAlchemy session factory."""

    def fetch_for_formatting(
        self, limit: Optional[int] = None, source: Optional[str] = None, force: bool = False
    ) -> List[DocumentRecord]:
        with get_session() as session:
            return DocumentRepository(session).list_for_formatting(
                limit=limit, source=source, force=force
            )

    def fetch_for_humanization(
        self, limit: Optional[int] = None, source: Optional[str] = None
    ) -> List[DocumentRecord]:
        with get_session() as session:
            return DocumentRepository(session).list_for_humanization(limit=limit, source=source)

    def save_formatted(
        self, document_id: str, description: Optional[str], raw_description: Optional[str]
    ) -> None:
        with get_session() as session:
            DocumentRepository(session).save_formatted(document_id, description, raw_description)
