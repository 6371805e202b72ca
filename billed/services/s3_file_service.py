"""S3FileService provides S3-backed storage for receipt images."""

import threading

import boto3
from botocore.exceptions import ClientError

from billed.core.settings import Settings, get_settings
from billed.core.utils import get_logger

logger = get_logger("billed.s3")


class S3FileService:
    """Service for S3 object operations: upload, download, delete, ensure bucket.

    Building the service makes no network call; the bucket is checked on the first upload.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the S3 client for the receipts bucket."""
        settings = settings or get_settings()
        self.s3 = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint_url,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
        )
        self.bucket = settings.s3_bucket
        self._bucket_ready = False
        self._bucket_lock = threading.Lock()

    def ensure_bucket(self) -> None:
        """Ensure the S3 bucket exists, create if not present."""
        with self._bucket_lock:
            if self._bucket_ready:
                return
            try:
                self.s3.head_bucket(Bucket=self.bucket)
            except ClientError:
                logger.info(f"Creating receipts bucket {self.bucket}")
                self.s3.create_bucket(Bucket=self.bucket)
            self._bucket_ready = True

    def upload_fileobj(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Upload bytes to S3 under the given key."""
        self.ensure_bucket()
        extra = {"ContentType": content_type} if content_type else {}
        self.s3.put_object(Bucket=self.bucket, Key=str(key), Body=data, **extra)

    def download_fileobj(self, key: str) -> tuple[bytes, str]:
        """Download an object from S3 by key, returning its bytes and content type."""
        obj = self.s3.get_object(Bucket=self.bucket, Key=str(key))
        return obj["Body"].read(), obj.get("ContentType", "application/octet-stream")

    def delete_fileobj(self, key: str) -> None:
        """Delete an object from S3 by key."""
        self.s3.delete_object(Bucket=self.bucket, Key=str(key))
