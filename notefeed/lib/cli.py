from __future__ import annotations

import enum
import pathlib

import click
import pydantic as p
from click import *  # noqa: F401, F403 # pyright: ignore [reportWildcardImportFromLibrary]

# Command modules import this module as `click`: the stock API plus the
# parameter types below.


class EnumType(click.ParamType):
    """Parameter whose value must be one of an enum's values."""

    def __init__(self, enum: type[enum.Enum]):
        self.enum = enum
        self.name = enum.__name__

    def convert(
        self, value: str | enum.Enum | None, param: click.Parameter | None, ctx: click.Context | None
    ) -> enum.Enum | None:
        if value is None or isinstance(value, self.enum):
            return value
        try:
            return self.enum(value)
        except ValueError:
            self.fail(f"valid {self.name} values {[e.value for e in self.enum]}", param, ctx)

    def __repr__(self) -> str:
        return self.name


class URIParamType(click.ParamType):
    """Parameter taking a URI; plain filesystem paths become `file://` URIs.

    `dir_ok` accepts directories. With `file_exists`, a `file://` URI must
    name something that exists.
    """

    def __init__(self, dir_ok: bool = False, file_exists: bool = True):
        self.dir_ok = dir_ok
        self.file_exists = file_exists
        self.name = "URI OR PATH"

    def convert(
        self, value: str | pathlib.Path | p.AnyUrl | None, param: click.Parameter | None, ctx: click.Context | None
    ) -> p.AnyUrl | None:
        if value is None or isinstance(value, p.AnyUrl):
            return value

        if isinstance(value, str) and "://" in value:
            url = p.AnyUrl(value)
            if url.scheme != "file":
                return url
            path = pathlib.Path(url.path or "")
        else:
            path = pathlib.Path(value)

        path = path.absolute()
        if self.file_exists and not path.exists():
            self.fail(f"{value}: no such file or directory", param, ctx)
        if self.file_exists and path.is_dir() and not self.dir_ok:
            self.fail(f"{value}: directory not accepted", param, ctx)
        return p.FileUrl(f"file://{path}")
