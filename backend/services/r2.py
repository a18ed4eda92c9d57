"""Cloudflare R2 blob storage for snapshots."""

from __future__ import annotations

import asyncio
import logging

import aioboto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from backend.config import settings
from pagekit.store import BlobAccessDenied, BlobNotFound, BlobStorage, BlobUnavailable

logger = logging.getLogger(__name__)

# Retryable S3 error codes
_RETRYABLE_CODES = {"RequestTimeout", "ServiceUnavailable", "ThrottlingException", "Throttling", "SlowDown"}
_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}
_ACCESS_DENIED_CODES = {"AccessDenied", "403", "Forbidden"}


def classify_client_error(e: ClientError, key: str) -> Exception:
    """Map an S3 error response onto the blob error taxonomy."""
    code = str(e.response.get("Error", {}).get("Code", ""))
    if code in _NOT_FOUND_CODES:
        return BlobNotFound(key)
    if code in _ACCESS_DENIED_CODES:
        return BlobAccessDenied(key)
    return BlobUnavailable(f"R2 error {code or 'unknown'} for {key}")


class R2Service(BlobStorage):
    """Cloudflare R2 storage service using S3-compatible API."""

    def __init__(self, bucket: str | None = None, timeout: float | None = None) -> None:
        """Initialize R2 service with credentials from settings."""
        self.session = aioboto3.Session()
        self.endpoint = settings.R2_ENDPOINT
        self.access_key = settings.R2_ACCESS_KEY
        self.secret_key = settings.R2_SECRET_KEY
        self.bucket = bucket or settings.R2_SNAPSHOT_BUCKET
        self.timeout = timeout if timeout is not None else settings.STORAGE_TIMEOUT_SECONDS

    def _client(self):
        return self.session.client(
            "s3",
            endpoint_url=self.endpoint or None,
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            config=BotoConfig(
                connect_timeout=self.timeout,
                read_timeout=self.timeout,
                retries={"max_attempts": 1},
            ),
        )

    async def get(self, key: str) -> bytes:
        """
        Fetch a blob by key.

        Raises:
            BlobNotFound: The object does not exist
            BlobAccessDenied: The credentials may not read the object
            BlobUnavailable: Network failure, timeout, or any other R2 error
        """
        try:
            async with asyncio.timeout(self.timeout):
                async with self._client() as s3:
                    response = await s3.get_object(Bucket=self.bucket, Key=key)
                    return await response["Body"].read()
        except ClientError as e:
            raise classify_client_error(e, key) from e
        except (BotoCoreError, TimeoutError, OSError) as e:
            raise BlobUnavailable(f"R2 read failed for {key}: {e}") from e

    async def put(self, key: str, data: bytes, max_retries: int = 1) -> None:
        """
        Write a blob with retry on transient failures.

        Args:
            key: Object key
            data: Object body
            max_retries: Number of retries on transient failures (default 1)

        Raises:
            BlobUnavailable: The write did not succeed
        """
        last_error: Exception | None = None

        for attempt in range(max_retries + 1):
            try:
                async with asyncio.timeout(self.timeout):
                    async with self._client() as s3:
                        await s3.put_object(
                            Bucket=self.bucket,
                            Key=key,
                            Body=data,
                            ContentType="application/json",
                        )
                return
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "")
                last_error = e
                if error_code not in _RETRYABLE_CODES:
                    break
            except (BotoCoreError, TimeoutError, OSError) as e:
                # Network errors, timeouts, etc.
                last_error = e

            if attempt < max_retries:
                wait_time = 2**attempt
                logger.warning("R2 upload error (attempt %d), retrying in %ds: %s", attempt + 1, wait_time, last_error)
                await asyncio.sleep(wait_time)

        raise BlobUnavailable(f"R2 write failed for {key}: {last_error}") from last_error


# Singleton instance
r2_service = R2Service()
