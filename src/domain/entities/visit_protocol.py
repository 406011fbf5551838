"""Visit protocol entity (a protocol rule instantiated for one visit).

State Machine:
    PENDING → READY_FOR_SIGNATURE → SIGNED

    - mark_ready_for_signature: PENDING only, needs the filled document key
    - sign: READY_FOR_SIGNATURE only, needs signed document, signer and
      signature image; stamps signed_at
    - SIGNED instances are immutable

Usage:
    protocol.mark_ready_for_signature(filled_key)
    protocol.sign(
        signed_document_key=signed_key,
        signed_by="Jan Kowalski",
        signature_image_key=signature_key,
    )
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.enums import ProtocolStage, VisitProtocolStatus
from src.domain.errors import ProtocolError


@dataclass
class VisitProtocol:
    """Signable protocol document required for a visit stage.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        visit_id: Owning visit.
        template_id: Template the document was produced from.
        stage: Visit stage.
        version: Generation number within the visit (1 for the first batch).
        is_mandatory: Copied from the rule at generation time.
        status: Signing workflow status.
        filled_document_key: Storage key of the filled PDF.
        signed_document_key: Storage key of the signed PDF.
        signed_at: Signature timestamp.
        signed_by: Signer's name.
        signature_image_key: Storage key of the signature image.
        notes: Optional free text.
    """

    id: UUID
    studio_id: UUID
    visit_id: UUID
    template_id: UUID
    stage: ProtocolStage
    version: int = 1
    is_mandatory: bool = True
    status: VisitProtocolStatus = VisitProtocolStatus.PENDING
    filled_document_key: str | None = None
    signed_document_key: str | None = None
    signed_at: datetime | None = None
    signed_by: str | None = None
    signature_image_key: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate signature metadata.

        Raises:
            ValueError: If SIGNED without signed document, timestamp or signer.
        """
        if self.status == VisitProtocolStatus.SIGNED and not (
            self.signed_document_key and self.signed_at and self.signed_by
        ):
            raise ValueError("Signed protocol requires document, timestamp and signer")

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def is_signed(self) -> bool:
        """Check if the protocol has been signed."""
        return self.status == VisitProtocolStatus.SIGNED

    def is_immutable(self) -> bool:
        """Signed protocols cannot change."""
        return self.is_signed()

    def storage_keys(self) -> list[str]:
        """All object storage keys referenced by this protocol."""
        return [
            key
            for key in (
                self.filled_document_key,
                self.signed_document_key,
                self.signature_image_key,
            )
            if key
        ]

    # -------------------------------------------------------------------------
    # State Transitions
    # -------------------------------------------------------------------------

    def mark_ready_for_signature(self, filled_document_key: str) -> Result[None, str]:
        """Transition PENDING → READY_FOR_SIGNATURE.

        Args:
            filled_document_key: Storage key of the filled document.

        Returns:
            Success(None) or Failure(ProtocolError.*).
        """
        if self.is_immutable():
            return Failure(error=ProtocolError.ALREADY_SIGNED)
        if self.status != VisitProtocolStatus.PENDING:
            return Failure(error=ProtocolError.NOT_PENDING)
        if not filled_document_key:
            return Failure(error=ProtocolError.DOCUMENT_KEY_REQUIRED)

        self.filled_document_key = filled_document_key
        self.status = VisitProtocolStatus.READY_FOR_SIGNATURE
        self.updated_at = datetime.now(UTC)
        return Success(value=None)

    def sign(
        self,
        *,
        signed_document_key: str,
        signed_by: str,
        signature_image_key: str,
        notes: str | None = None,
    ) -> Result[None, str]:
        """Transition READY_FOR_SIGNATURE → SIGNED.

        Args:
            signed_document_key: Storage key of the signed document.
            signed_by: Signer's name.
            signature_image_key: Storage key of the signature image.
            notes: Optional notes.

        Returns:
            Success(None) or Failure(ProtocolError.*).

        Side Effects:
            - Stamps signed_at with the current time
        """
        if self.is_immutable():
            return Failure(error=ProtocolError.ALREADY_SIGNED)
        if self.status != VisitProtocolStatus.READY_FOR_SIGNATURE:
            return Failure(error=ProtocolError.NOT_READY_FOR_SIGNATURE)
        if not signed_document_key:
            return Failure(error=ProtocolError.DOCUMENT_KEY_REQUIRED)
        if not signed_by or not signed_by.strip():
            return Failure(error=ProtocolError.SIGNER_REQUIRED)
        if not signature_image_key:
            return Failure(error=ProtocolError.SIGNATURE_IMAGE_REQUIRED)

        now = datetime.now(UTC)
        self.signed_document_key = signed_document_key
        self.signed_by = signed_by.strip()
        self.signature_image_key = signature_image_key
        self.notes = notes
        self.signed_at = now
        self.status = VisitProtocolStatus.SIGNED
        self.updated_at = now
        return Success(value=None)
