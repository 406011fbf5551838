"""ObjectStorageProtocol for document and image blobs.

The core only deletes blobs (during draft cancellation). Uploads and
downloads go through presigned URLs handled outside this service.

Key layout:
    {studio}/protocols/visits/{visit}/filled/{protocol}.pdf
    {studio}/protocols/visits/{visit}/signed/{protocol}.pdf
    {studio}/protocols/visits/{visit}/signatures/{protocol}.png
    {studio}/visits/{visit}/damage-map/{file}
    {studio}/visits/{visit}/documents/{file}
"""

from typing import Protocol


class ObjectStorageProtocol(Protocol):
    """Object storage port."""

    async def delete(self, key: str) -> None:
        """Delete a stored object. Deleting a missing key is not an error.

        Args:
            key: Object key.

        Raises:
            Exception: Backend failures propagate; callers decide whether
                cleanup is best-effort.
        """
        ...
