"""Studio context dependencies.

Authentication happens upstream (API gateway / identity provider). The
gateway forwards the resolved tenant and staff member as headers; these
dependencies turn them into the StudioContext every command and query
carries.

Usage:
    async def list_visits(
        context: CurrentStudio,
        handler: ListVisitsHandler = Depends(get_list_visits_handler),
    ):
        ...
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.domain.value_objects import StudioContext

STUDIO_HEADER = "X-Studio-ID"
USER_HEADER = "X-User-ID"


def _parse_header_uuid(name: str, value: str | None) -> UUID:
    if not value:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {name} header",
        )
    try:
        return UUID(value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {name} header",
        ) from e


async def get_studio_context(
    x_studio_id: Annotated[str | None, Header(alias=STUDIO_HEADER)] = None,
    x_user_id: Annotated[str | None, Header(alias=USER_HEADER)] = None,
) -> StudioContext:
    """Build the studio context from gateway headers.

    Args:
        x_studio_id: Tenant identifier header.
        x_user_id: Acting staff member header.

    Returns:
        StudioContext for the request.

    Raises:
        HTTPException 401: If a header is missing or not a UUID.
    """
    return StudioContext(
        studio_id=_parse_header_uuid(STUDIO_HEADER, x_studio_id),
        user_id=_parse_header_uuid(USER_HEADER, x_user_id),
    )


# Type alias for cleaner endpoint signatures
CurrentStudio = Annotated[StudioContext, Depends(get_studio_context)]
