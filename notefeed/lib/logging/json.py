import datetime
import enum
import json
import pathlib
import typing as t

import pydantic as p

JSONValue = str | int | float | bool | None | list["JSONValue"] | dict[str, "JSONValue"]


def encode_bytes(obj: bytes) -> str:
    """Hex dump of the first 16 bytes, with the total length."""
    head = " ".join(f"{b:02X}" for b in obj[:16])
    more = " ..." if len(obj) > 16 else ""
    return f"[{len(obj):5}] {head}{more}"


class JSONEncoder(json.JSONEncoder):
    """Lenient encoder for log record fields: anything unknown becomes its repr."""

    encoders: t.ClassVar[tuple[tuple[type, t.Callable[[t.Any], JSONValue]], ...]] = (
        (p.BaseModel, lambda o: o.model_dump(mode="json")),
        (datetime.date, lambda o: o.isoformat()),
        (datetime.timedelta, lambda o: o.total_seconds()),
        (enum.Enum, lambda o: o.value),
        (pathlib.PurePath, str),
        (p.Secret, str),
        ((set, frozenset), list),
        (bytes, encode_bytes),
    )

    def default(self, o: t.Any) -> JSONValue:
        for tp, encode in self.encoders:
            if isinstance(o, tp):
                return encode(o)
        return repr(o)
