__all__ = [
    # Base
    "BaseModel",
    "ValueModel",
    "WithCtime",
    "WithMtime",
    "WithTimestamps",
    # Enums
    "DeploymentEnvironment",
    "SyncErrorKind",
    # ID Types
    "AssignmentID",
    "FeedbackID",
    "GradeID",
    "LinkID",
    "UserID",
    # Feedback
    "FeedbackRecord",
    "Grade",
    "SummaryView",
    # Files
    "FileArea",
    "StoredFile",
    # Links
    "ExternalDocumentLink",
]

from .base import BaseModel, ValueModel, WithCtime, WithMtime, WithTimestamps
from .enum import DeploymentEnvironment, SyncErrorKind
from .feedback import FeedbackRecord, Grade, SummaryView
from .file import FileArea, StoredFile
from .id import AssignmentID, FeedbackID, GradeID, LinkID, UserID
from .link import ExternalDocumentLink
