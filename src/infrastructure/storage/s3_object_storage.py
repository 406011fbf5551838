"""S3 object storage adapter.

Implements ObjectStorageProtocol with boto3. boto3 is synchronous, so each
call runs in the default executor to keep the event loop free.

File: s3_object_storage.py → class S3ObjectStorage (PEP 8 naming)
"""

import asyncio
from functools import partial
from typing import Any

import boto3


class S3ObjectStorage:
    """Document and image blobs in an S3 (or S3-compatible) bucket.

    Implementation does NOT inherit from ObjectStorageProtocol (PEP 544
    structural subtyping).

    Example:
        >>> storage = S3ObjectStorage(bucket="detailing-documents", region="eu-central-1")
        >>> await storage.delete(f"{studio_id}/visits/{visit_id}/damage-map/map.png")
    """

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize the S3 client.

        Args:
            bucket: Bucket holding all studio blobs.
            region: AWS region of the bucket.
            endpoint_url: Optional S3-compatible endpoint (MinIO in development).
            client: Preconfigured boto3 S3 client (tests).
        """
        self._bucket = bucket
        self._client = client or boto3.client(
            "s3", region_name=region, endpoint_url=endpoint_url
        )

    async def delete(self, key: str) -> None:
        """Delete a stored object. S3 treats a missing key as success.

        Args:
            key: Object key.

        Raises:
            botocore.exceptions.ClientError: Access denied or backend failure.
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._client.delete_object, Bucket=self._bucket, Key=key)
        )
