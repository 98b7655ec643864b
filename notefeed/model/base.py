import datetime
import typing as t

import pydantic as p


class BaseModel(p.BaseModel):
    def model_dump(self, **kwargs: t.Any) -> dict[str, t.Any]:
        # dump by alias unless told otherwise
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)


class ValueModel(BaseModel):
    """Immutable, hashable value object."""

    model_config = p.ConfigDict(frozen=True)


class WithCtime(BaseModel):
    create_time: datetime.datetime


class WithMtime(BaseModel):
    update_time: datetime.datetime


class WithTimestamps(WithCtime, WithMtime): ...
