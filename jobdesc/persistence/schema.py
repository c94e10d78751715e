"""Database schema definition and ORM models.

The pipeline needs three durable fields per description: the current
``description``, the nullable ``raw_description`` audit copy, and
``updated_at``. The remaining columns identify the record in reports and
support the source filter.
"""

import logging

from sqlalchemy import Column, Index, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from jobdesc.domain.models import DocumentRecord
from jobdesc.utils.timestamps import STORAGE_FORMAT, parse_iso_datetime

logger = logging.getLogger(__name__)

Base = declarative_base()


class DocumentModel(Base):
    """ORM model for the job_descriptions table."""

    __tablename__ = "job_descriptions"

    id = Column(String(128), primary_key=True, nullable=False)
    source = Column(String(100), nullable=True)
    title = Column(Text, nullable=True)
    company = Column(String(255), nullable=True)

    # Current best text (markdown once formatted)
    description = Column(Text, nullable=True)
    # Untouched original; NULL means no transformation was ever required
    raw_description = Column(Text, nullable=True)

    # ISO 8601 string, UTC
    updated_at = Column(String(50), nullable=True)

    __table_args__ = (
        Index("idx_job_descriptions_source", "source"),
        Index("idx_job_descriptions_updated_at", "updated_at"),
    )

    def to_domain(self) -> DocumentRecord:
        return DocumentRecord(
            id=self.id,
            source=self.source,
            title=self.title,
            company=self.company,
            description=self.description,
            raw_description=self.raw_description,
            updated_at=parse_iso_datetime(self.updated_at),
        )

    @classmethod
    def from_domain(cls, record: DocumentRecord) -> "DocumentModel":
        return cls(
            id=record.id,
            source=record.source,
            title=record.title,
            company=record.company,
            description=record.description,
            raw_description=record.raw_description,
            updated_at=record.updated_at.strftime(STORAGE_FORMAT) if record.updated_at else None,
        )


def create_schema(engine: Engine) -> None:
    """Create tables and indexes if they don't exist (safe to call repeatedly).

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.info("Creating database schema if not exists")
    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
