from __future__ import annotations

import typing as t
from pathlib import Path

import pydantic as p

from .base import BaseSettings


class FileSettings(BaseSettings):
    """Where feedback file areas are kept."""

    backend: t.Literal["local"] = "local"
    local_path: Path | None = None


class StorageSettings(BaseSettings):
    persistent: PersistentSettings
    files: FileSettings = FileSettings()


class PersistentSettings(BaseSettings):
    database: DatabaseSettings


class DatabaseSettings(BaseSettings):
    driver: t.Literal["postgresql+psycopg", "sqlite"] = "postgresql+psycopg"
    host: p.IPvAnyAddress | str | None = None
    port: int | None = 5432
    # for sqlite, a file path or ":memory:"
    database: str
    echo: bool = False
