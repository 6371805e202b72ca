"""Receipt storage on top of S3."""

from urllib.parse import quote

from .s3_file_service import S3FileService


class FileService:
    """Service for receipt file operations using S3 as backend."""

    def __init__(self, s3_service: S3FileService, base_url: str = "/receipts") -> None:
        """Initialize FileService with an S3FileService instance and the public receipts URL prefix."""
        self.s3 = s3_service
        self.base_url = base_url.rstrip("/")

    def save_receipt(self, bill_id: str, file_name: str, data: bytes, content_type: str | None = None) -> str:
        """Store a receipt for a bill and return its storage key."""
        key = receipt_key(bill_id, file_name)
        self.s3.upload_fileobj(key, data, content_type)
        return key

    def get_file(self, key: str) -> tuple[bytes, str]:
        """Retrieve a stored file and its content type by key."""
        return self.s3.download_fileobj(key)

    def delete_file(self, key: str) -> None:
        """Delete a stored file by key."""
        self.s3.delete_fileobj(key)

    def url_for(self, key: str) -> str:
        """Public URL under which a stored receipt is served."""
        return f"{self.base_url}/{quote(key)}"


def receipt_key(bill_id: str, file_name: str) -> str:
    """Storage key of a bill's receipt."""
    safe_name = file_name.replace("/", "_").replace("\\", "_")
    return f"receipts/{bill_id}/{safe_name}"
