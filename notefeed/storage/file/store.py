"""File store interface and implementations."""

from __future__ import annotations

import abc
import datetime
import logging
import os
import shutil
import tempfile
from pathlib import Path

from notefeed.model import AssignmentID, FileArea, StoredFile

logger = logging.getLogger(__name__)

STAGING_PREFIX = ".staging-"


class FileStore(abc.ABC):
    """Abstract base class for file storage, keyed by file area."""

    @abc.abstractmethod
    def list_files(self, area: FileArea) -> tuple[StoredFile, ...]:
        """List the files of an area, ordered by filename.

        Args:
            area: The file area.

        Returns:
            The stored files; empty if the area does not exist.
        """
        ...

    @abc.abstractmethod
    def create_from_path(self, area: FileArea, filename: str, path: Path) -> StoredFile:
        """Copy a local file into an area, replacing any file of the same name.

        Args:
            area: The destination file area.
            filename: Name of the file within the area.
            path: Local file to copy.

        Returns:
            The stored file.
        """
        ...

    @abc.abstractmethod
    def delete(self, area: FileArea, filename: str) -> bool:
        """Delete one file from an area.

        Returns:
            True if deleted, False if not found.
        """
        ...

    @abc.abstractmethod
    def delete_all(self, area: FileArea) -> int:
        """Delete every file of an area. Succeeds when the area is empty.

        Returns:
            Number of files deleted.
        """
        ...

    @abc.abstractmethod
    def delete_context(self, component: str, context_id: AssignmentID) -> int:
        """Delete every area a component holds for one context.

        Returns:
            Number of files deleted.
        """
        ...

    def count_files(self, area: FileArea) -> int:
        return len(self.list_files(area))


class LocalFileStore(FileStore):
    """Local filesystem implementation; one directory per area."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = base_path

        # Ensure base directory exists
        self._base_path.mkdir(parents=True, exist_ok=True)

    def _area_path(self, area: FileArea) -> Path:
        return self._base_path / area.key

    def _file_path(self, area: FileArea, filename: str) -> Path:
        if not filename or filename in (".", "..") or "/" in filename or os.sep in filename:
            raise ValueError(f"invalid filename: {filename!r}")
        return self._area_path(area) / filename

    def _stat(self, area: FileArea, path: Path) -> StoredFile:
        st = path.stat()
        return StoredFile(
            area=area,
            filename=path.name,
            size=st.st_size,
            modified_time=datetime.datetime.fromtimestamp(st.st_mtime, datetime.UTC),
        )

    def list_files(self, area: FileArea) -> tuple[StoredFile, ...]:
        area_path = self._area_path(area)
        if not area_path.is_dir():
            return ()
        return tuple(self._stat(area, f) for f in sorted(area_path.iterdir()) if _is_stored(f))

    def create_from_path(self, area: FileArea, filename: str, path: Path) -> StoredFile:
        file_path = self._file_path(area, filename)

        # Ensure parent directories exist
        file_path.parent.mkdir(parents=True, exist_ok=True)

        # Copy beside the destination, then rename, so readers never see a partial file
        fd, staging = tempfile.mkstemp(prefix=STAGING_PREFIX, dir=file_path.parent)
        try:
            with os.fdopen(fd, "wb") as dest, open(path, "rb") as src:
                shutil.copyfileobj(src, dest)
            os.replace(staging, file_path)
        except BaseException:
            Path(staging).unlink(missing_ok=True)
            raise

        stored = self._stat(area, file_path)
        logger.debug("stored file", extra={"area": area.key, "file": filename, "size": stored.size})
        return stored

    def delete(self, area: FileArea, filename: str) -> bool:
        file_path = self._file_path(area, filename)

        if file_path.is_file():
            file_path.unlink()
            return True

        return False

    def delete_all(self, area: FileArea) -> int:
        area_path = self._area_path(area)
        if not area_path.is_dir():
            return 0

        count = sum(1 for f in area_path.iterdir() if _is_stored(f))
        shutil.rmtree(area_path)
        return count

    def delete_context(self, component: str, context_id: AssignmentID) -> int:
        context_path = self._base_path / component / str(context_id)
        if not context_path.is_dir():
            return 0

        count = sum(1 for f in context_path.rglob("*") if _is_stored(f))
        shutil.rmtree(context_path)
        return count


def _is_stored(path: Path) -> bool:
    return path.is_file() and not path.name.startswith(STAGING_PREFIX)
