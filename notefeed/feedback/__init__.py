__all__ = [
    "AuthRequiredError",
    "DocumentClient",
    "ExportFailedError",
    "FeedbackSyncService",
    "GradeLocks",
    "LinkNotFoundError",
    "StoreWriteFailedError",
    "SyncError",
]

from .errors import AuthRequiredError, ExportFailedError, LinkNotFoundError, StoreWriteFailedError, SyncError
from .lock import GradeLocks
from .service import DocumentClient, FeedbackSyncService
