from __future__ import annotations

import typing as t

import annotated_types as ant
import pydantic as p
import pydantic_core.core_schema as core_schema
import shortuuid

KEY_LENGTH = 22


class ShortUUIDKey(str):
    """A shortuuid behind a fixed type prefix, e.g. `fdbk$mhvXdrZT4jP5T8vBxuvm75`.

    `ShortUUIDKey()` mints a new key. `ShortUUIDKey(s)` validates a prefixed
    string; `ShortUUIDKey(key=k)` trusts a bare shortuuid read back from
    storage.
    """

    prefix: t.ClassVar[str]
    separator: t.ClassVar[str]

    @p.validate_call
    def __init_subclass__(cls, prefix: t.Annotated[str, ant.Len(4)], separator: t.Annotated[str, ant.Len(1)] = "$"):
        super().__init_subclass__()
        cls.prefix = prefix
        cls.separator = separator

    def __new__(cls, s: str | None = None, /, key: str | None = None) -> t.Self:
        if key is None and s is None:
            key = shortuuid.uuid()
        elif key is None:
            assert s is not None
            key = cls._parse(s)
        return super().__new__(cls, f"{cls.prefix}{cls.separator}{key}")

    @classmethod
    def _parse(cls, s: str) -> str:
        head = cls.prefix + cls.separator
        if not s.startswith(head):
            raise ValueError(f"invalid {cls.__name__}: key must begin with {head!r}")
        key = s[len(head) :]
        if len(key) != KEY_LENGTH:
            raise ValueError(f"invalid {cls.__name__}: key must have length {KEY_LENGTH}")
        alphabet = shortuuid.get_alphabet()
        if any(c not in alphabet for c in key):
            raise ValueError(f"invalid {cls.__name__}: key must comprise only {alphabet}")
        return key

    @property
    def key(self) -> str:
        return self[len(self.prefix) + len(self.separator) :]

    @classmethod
    def __get_pydantic_core_schema__(cls, src: t.Any, handler: p.GetCoreSchemaHandler) -> core_schema.CoreSchema:
        from_str = core_schema.no_info_after_validator_function(cls, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(str.__str__),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, src: t.Any, handler: p.GetJsonSchemaHandler) -> p.json_schema.JsonSchemaValue:
        return {"type": "string"}

    def __hash__(self) -> int:
        return str.__hash__(self)

    def __str__(self) -> str:
        return str.__str__(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.key}>"


# fmt: off
class FeedbackID(ShortUUIDKey, prefix="fdbk"): ...
class LinkID(ShortUUIDKey, prefix="link"): ...
# fmt: on

# Grade, assignment, and user identifiers are issued by the host LMS
GradeID = int
AssignmentID = int
UserID = int
