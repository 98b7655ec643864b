"""Tests for notefeed.storage.file module."""

from __future__ import annotations

import typing as t
from pathlib import Path

import pytest

from notefeed.model import FileArea
from notefeed.storage.file import LocalFileStore
from notefeed.storage.file.store import STAGING_PREFIX


def area(context_id: int = 10, item_id: int = 1, component: str = "assignfeedback_onenote") -> FileArea:
    return FileArea(component=component, area="feedback", context_id=context_id, item_id=item_id)


class TestCreateFromPath(object):
    def test_create_and_list(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        stored = file_store.create_from_path(area(), "OneNote_1.zip", make_file(b"zipdata"))

        assert stored.filename == "OneNote_1.zip"
        assert stored.size == len(b"zipdata")
        assert stored.area == area()
        assert file_store.list_files(area()) == (stored,)

    def test_same_name_replaces(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        file_store.create_from_path(area(), "OneNote_1.zip", make_file(b"old"))
        stored = file_store.create_from_path(area(), "OneNote_1.zip", make_file(b"newer"))

        assert stored.size == len(b"newer")
        assert file_store.count_files(area()) == 1

    def test_source_is_left_in_place(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        src = make_file()
        file_store.create_from_path(area(), "a.zip", src)
        assert src.exists()

    @pytest.mark.parametrize("filename", ["", ".", "..", "../escape.zip", "sub/dir.zip"])
    def test_invalid_filename(
        self, file_store: LocalFileStore, make_file: t.Callable[..., Path], filename: str
    ) -> None:
        with pytest.raises(ValueError, match="invalid filename"):
            file_store.create_from_path(area(), filename, make_file())

    def test_missing_source_raises_oserror(self, file_store: LocalFileStore, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            file_store.create_from_path(area(), "a.zip", tmp_path / "nope.zip")

        assert file_store.list_files(area()) == ()


class TestListFiles(object):
    def test_missing_area_is_empty(self, file_store: LocalFileStore) -> None:
        assert file_store.list_files(area()) == ()
        assert file_store.count_files(area()) == 0

    def test_areas_are_separate(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        file_store.create_from_path(area(item_id=1), "a.zip", make_file())
        file_store.create_from_path(area(item_id=2), "b.zip", make_file())

        assert [f.filename for f in file_store.list_files(area(item_id=1))] == ["a.zip"]
        assert [f.filename for f in file_store.list_files(area(item_id=2))] == ["b.zip"]

    def test_ignores_staging_files(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        file_store.create_from_path(area(), "a.zip", make_file())
        staging = file_store._area_path(area()) / f"{STAGING_PREFIX}abc"  # pyright: ignore[reportPrivateUsage]
        staging.write_bytes(b"partial")

        assert [f.filename for f in file_store.list_files(area())] == ["a.zip"]


class TestDelete(object):
    def test_delete_one(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        file_store.create_from_path(area(), "a.zip", make_file())
        file_store.create_from_path(area(), "b.zip", make_file())

        assert file_store.delete(area(), "a.zip") is True
        assert file_store.delete(area(), "a.zip") is False
        assert [f.filename for f in file_store.list_files(area())] == ["b.zip"]

    def test_delete_all(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        file_store.create_from_path(area(), "a.zip", make_file())
        file_store.create_from_path(area(), "b.zip", make_file())

        assert file_store.delete_all(area()) == 2
        assert file_store.list_files(area()) == ()

    def test_delete_all_empty_area(self, file_store: LocalFileStore) -> None:
        assert file_store.delete_all(area()) == 0

    def test_delete_context(self, file_store: LocalFileStore, make_file: t.Callable[..., Path]) -> None:
        file_store.create_from_path(area(context_id=10, item_id=1), "a.zip", make_file())
        file_store.create_from_path(area(context_id=10, item_id=2), "b.zip", make_file())
        file_store.create_from_path(area(context_id=11, item_id=3), "c.zip", make_file())
        file_store.create_from_path(area(context_id=10, item_id=1, component="other"), "d.zip", make_file())

        assert file_store.delete_context("assignfeedback_onenote", 10) == 2
        assert file_store.count_files(area(context_id=10, item_id=1)) == 0
        assert file_store.count_files(area(context_id=11, item_id=3)) == 1
        assert file_store.count_files(area(context_id=10, item_id=1, component="other")) == 1
