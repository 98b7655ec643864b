__all__ = [
    "BootConfiguration",
    "di",
    "NotefeedContainer",
    "LoggingProvider",
    "Settings",
    "Secrets",
    "TimestampProvider",
]


from . import di
from .config import Secrets, Settings
from .container import BootConfiguration, NotefeedContainer
from .provider import LoggingProvider, TimestampProvider
