"""Document attached to a visit (invoice drafts, photos of papers, etc.)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class VisitDocument:
    """Stored document reference.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        visit_id: Owning visit.
        file_key: Object storage key.
        file_name: Original file name.
        document_type: Free-form category.
        uploaded_by: Staff member who uploaded it.
        uploaded_at: Upload timestamp.
    """

    id: UUID
    studio_id: UUID
    visit_id: UUID
    file_key: str
    file_name: str
    document_type: str
    uploaded_by: UUID
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))
