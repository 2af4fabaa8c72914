# =============================================================================
# core/services/storage_service.py - Object Storage Operations
# =============================================================================
# Pushes bytes to an S3-compatible bucket (DigitalOcean Spaces) and builds
# the public URL of a stored object.
# =============================================================================

import logging
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError

from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

PUBLIC_READ = "public-read"


class StorageService:
    """
    Object upload client for profile images.

    Bucket, region and provider domain are fixed at construction; the S3
    client already carries endpoint, credentials and timeouts.
    """

    def __init__(self, s3_client, bucket: str, region: str, domain: str = "digitaloceanspaces.com"):
        self._client = s3_client
        self.bucket = bucket
        self.region = region
        self.domain = domain

    def put(
        self,
        bucket: str,
        key: str,
        data: bytes,
        visibility: str = PUBLIC_READ,
        content_type: str | None = None,
    ) -> None:
        """
        Upload a payload under a key in one PutObject call.

        Args:
            bucket: Target bucket
            key: Object key
            data: Full payload
            visibility: Canned ACL (public-read makes the object retrievable)
            content_type: Optional MIME type stored with the object

        Raises:
            StorageUploadError: On any network, auth, timeout or remote error
        """
        params = {
            "Bucket": bucket,
            "Key": key,
            "Body": data,
            "ACL": visibility,
        }
        if content_type:
            params["ContentType"] = content_type

        try:
            self._client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Storage upload failed for {bucket}/{key}: {e}")
            raise StorageUploadError(key, str(e))

        logger.info(f"Uploaded {len(data)} bytes to storage: {bucket}/{key}")

    def public_url(self, key: str, bucket: str | None = None) -> str:
        """
        Get the public URL of an object.

        Args:
            key: Object key
            bucket: Bucket name (defaults to the configured one)

        Returns:
            https://{bucket}.{region}.{domain}/{key}
        """
        return f"https://{bucket or self.bucket}.{self.region}.{self.domain}/{quote(key)}"

    def check_bucket(self) -> bool:
        """Check that the configured bucket is reachable with our credentials."""
        try:
            self._client.head_bucket(Bucket=self.bucket)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Bucket check failed for {self.bucket}: {e}")
            return False
