"""Names used by modules that take their collaborators from the container.

Repository functions default their `session` argument to
`di.Provide["storage.persistent.session"]` and are wired at boot.
"""

from __future__ import annotations

__all__ = [
    "NotReady",
    "Provide",
    "inject",
]

import typing as t

from dependency_injector.wiring import inject, Provide


class NotReady(object):
    """Placeholder for container values only known once the container is booted."""

    _instance: t.ClassVar[NotReady | None] = None

    def __new__(cls) -> NotReady:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<NotReady>"
