"""Interface the maintenance pipeline needs from a storage collaborator."""

from typing import List, Optional, Protocol

from jobdesc.domain.models import DocumentRecord


class DocumentStore(Protocol):
    """Fetches descriptions to process and saves the results.

    Implementations raise ``PersistenceError`` (or a subclass) on failure;
    the pipeline records a failed save as an error for that document only.
    """

    def fetch_for_formatting(
        self, limit: Optional[int] = None, source: Optional[str] = None, force: bool = False
    ) -> List[DocumentRecord]: ...

    def fetch_for_humanization(
        self, limit: Optional[int] = None, source: Optional[str] = None
    ) -> List[DocumentRecord]: ...

    def save_formatted(
        self, document_id: str, description: Optional[str], raw_description: Optional[str]
    ) -> None: ...
