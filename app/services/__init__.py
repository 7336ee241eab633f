from app.services.import_service import upload_questions, validate_rows
from app.services.storage_service import StorageClient, get_storage_client

__all__ = [
    "upload_questions",
    "validate_rows",
    "StorageClient",
    "get_storage_client",
]
