"""Data access layer for stored job descriptions.

DocumentRepository wraps a SQLAlchemy session and returns domain models
rather than ORM rows. Every SQLAlchemy failure is re-raised as a
PersistenceError subclass so the maintenance pipeline can record it as a
per-document error.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobdesc.domain.models import DocumentRecord
from jobdesc.utils.timestamps import STORAGE_FORMAT, utc_now

from .exceptions import DataIntegrityError, PersistenceError, RecordNotFoundError
from .schema import DocumentModel

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Repository for job description rows."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get(self, document_id: str) -> Optional[DocumentRecord]:
        """Retrieve a description by id.

        Returns:
            DocumentRecord if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(DocumentModel, document_id)
            return model.to_domain() if model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving description {document_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve description: {e}") from e

    def upsert(self, record: DocumentRecord) -> DocumentRecord:
        """Insert a new description or replace the fields of an existing one.

        An existing ``raw_description`` is never replaced; the incoming raw
        copy is stored only when the row has none yet.

        Raises:
            DataIntegrityError: If a constraint is violated
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(DocumentModel, record.id)
            updated_at = (record.updated_at or utc_now()).strftime(STORAGE_FORMAT)

            if existing is None:
                model = DocumentModel.from_domain(record)
                model.updated_at = updated_at
                self.session.add(model)
                self.session.flush()
                return model.to_domain()

            existing.source = record.source
            existing.title = record.title
            existing.company = record.company
            existing.description = record.description
            if existing.raw_description is None:
                existing.raw_description = record.raw_description
            existing.updated_at = updated_at
            self.session.flush()
            return existing.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting description {record.id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to upsert description: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting description {record.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert description: {e}") from e

    def list_for_formatting(
        self, limit: Optional[int] = None, source: Optional[str] = None, force: bool = False
    ) -> List[DocumentRecord]:
        """List descriptions that are candidates for formatting.

        Without ``force`` only rows that were never formatted (no raw copy)
        are returned; the pipeline still runs its own pre-check on each.
        Rows without any description text are never returned.

        Args:
            limit: Maximum rows to return (None for all)
            source: Restrict to one originating feed
            force: Include rows that were already formatted

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = select(DocumentModel).where(
                DocumentModel.description.is_not(None), DocumentModel.description != ""
            )
            if not force:
                stmt = stmt.where(DocumentModel.raw_description.is_(None))
            if source:
                stmt = stmt.where(DocumentModel.source == source.strip().lower())
            stmt = stmt.order_by(DocumentModel.updated_at.asc(), DocumentModel.id.asc())
            if limit is not None:
                stmt = stmt.limit(limit)

            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing descriptions for formatting: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list descriptions: {e}") from e

    def list_for_humanization(
        self, limit: Optional[int] = None, source: Optional[str] = None
    ) -> List[DocumentRecord]:
        """List descriptions to score for humanization.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = select(DocumentModel).where(
                DocumentModel.description.is_not(None), DocumentModel.description != ""
            )
            if source:
                stmt = stmt.where(DocumentModel.source == source.strip().lower())
            stmt = stmt.order_by(DocumentModel.id.asc())
            if limit is not None:
                stmt = stmt.limit(limit)

            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing descriptions for humanization: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list descriptions: {e}") from e

    def save_formatted(
        self, document_id: str, description: Optional[str], raw_description: Optional[str]
    ) -> DocumentRecord:
        """Store a formatted description alongside its original text.

        The raw copy is written only if the row has none yet.

        Raises:
            RecordNotFoundError: If the description does not exist
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(DocumentModel, document_id)
            if model is None:
                raise RecordNotFoundError(f"Description not found: {document_id}")

            model.description = description
            if model.raw_description is None and raw_description is not None:
                model.raw_description = raw_description
            model.updated_at = utc_now().strftime(STORAGE_FORMAT)
            self.session.flush()

            logger.debug(f"Saved formatted description {document_id}")
            return model.to_domain()

        except RecordNotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error saving formatted description {document_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save formatted description: {e}") from e

    def save_description(self, document_id: str, description: str) -> DocumentRecord:
        """Replace the current description text, leaving the raw copy alone.

        Raises:
            RecordNotFoundError: If the description does not exist
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(DocumentModel, document_id)
            if model is None:
                raise RecordNotFoundError(f"Description not found: {document_id}")

            model.description = description
            model.updated_at = utc_now().strftime(STORAGE_FORMAT)
            self.session.flush()
            return model.to_domain()

        except RecordNotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error saving description {document_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save description: {e}") from e

    def count(self, source: Optional[str] = None) -> int:
        """Count stored descriptions, optionally for one source."""
        try:
            stmt = select(func.count()).select_from(DocumentModel)
            if source:
                stmt = stmt.where(DocumentModel.source == source.strip().lower())
            return int(self.session.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            logger.error(f"Error counting descriptions: {e}", exc_info=True)
            raise PersistenceError(f"Failed to count descriptions: {e}") from e
