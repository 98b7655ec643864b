"""Area-scoped file storage for feedback artifacts."""

from .store import FileStore, LocalFileStore

__all__ = ["FileStore", "LocalFileStore"]
