"""Services package: receipt storage and the bill store."""

from .file_service import FileService  # noqa: F401
from .s3_file_service import S3FileService  # noqa: F401
from .store import BillsResource, BillStoreClient, SqlBillStore  # noqa: F401
