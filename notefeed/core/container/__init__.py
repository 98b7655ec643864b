__all__ = [
    "BootConfiguration",
    "FeedbackContainer",
    "NotefeedContainer",
    "StorageContainer",
    "VendorContainer",
]

from .feedback import FeedbackContainer
from .notefeed import BootConfiguration, NotefeedContainer
from .storage import StorageContainer
from .vendor import VendorContainer
