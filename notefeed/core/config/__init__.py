__all__ = [
    "DatabaseSettings",
    "FeedbackSettings",
    "FileSettings",
    "LoggingSettings",
    "OneNoteSettings",
    "Secrets",
    "Settings",
    "StorageSettings",
    "VendorSettings",
]


from .feedback import FeedbackSettings
from .logging import LoggingSettings
from .secrets import Secrets
from .settings import Settings
from .storage import DatabaseSettings, FileSettings, StorageSettings
from .vendor import OneNoteSettings, VendorSettings
