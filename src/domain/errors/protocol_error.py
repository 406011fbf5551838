"""Protocol rule and visit protocol errors."""


class ProtocolError:
    """Protocol error constants.

    Error Categories:
        - Lookup errors: RULE_NOT_FOUND, PROTOCOL_NOT_FOUND
        - Rule validation: service id and display order constraints
        - Instance state: signing workflow ordering and immutability
    """

    # -------------------------------------------------------------------------
    # Lookup Errors
    # -------------------------------------------------------------------------

    RULE_NOT_FOUND = "Protocol rule not found"
    """No rule with this ID under the requesting studio."""

    PROTOCOL_NOT_FOUND = "Visit protocol not found"
    """No protocol instance with this ID under the requesting studio."""

    # -------------------------------------------------------------------------
    # Rule Validation Errors
    # -------------------------------------------------------------------------

    SERVICE_IDS_REQUIRED = "Service-specific rule must list at least one service"
    """SERVICE_SPECIFIC rules need a non-empty service set."""

    SERVICE_IDS_NOT_ALLOWED = "Global rule cannot list services"
    """GLOBAL_ALWAYS rules must have an empty service set."""

    NEGATIVE_DISPLAY_ORDER = "Display order cannot be negative"
    """Display order must be zero or greater."""

    # -------------------------------------------------------------------------
    # Instance State Errors
    # -------------------------------------------------------------------------

    NOT_PENDING = "Protocol can be marked ready for signature only while PENDING"
    """PENDING → READY_FOR_SIGNATURE only."""

    NOT_READY_FOR_SIGNATURE = (
        "Protocol can be signed only when READY_FOR_SIGNATURE"
    )
    """READY_FOR_SIGNATURE → SIGNED only."""

    ALREADY_SIGNED = "Signed protocol cannot be modified"
    """SIGNED instances are immutable."""

    DOCUMENT_KEY_REQUIRED = "Document reference is required"
    """Filled and signed transitions need a stored document key."""

    SIGNER_REQUIRED = "Signer name is required"
    """Signing needs the signer's name."""

    SIGNATURE_IMAGE_REQUIRED = "Signature image reference is required"
    """Signing needs the stored signature image key."""
