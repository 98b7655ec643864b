import typing as t

from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import SettingsConfigDict

from notefeed.model import BaseModel


class _SettingsBase(PydanticBaseSettings):
    model_config = SettingsConfigDict(env_prefix="NOTEFEED_")

    def __init__(self, cf: dict[str, t.Any] | None = None, **kwargs: t.Any):
        # specifically allow initialization with a dict
        if cf is not None:
            kwargs = {**cf, **kwargs}
        super().__init__(**kwargs)

    def model_dump(self, **kwargs: t.Any) -> dict[str, t.Any]:
        # invert default by_alias to True, as notefeed.model.BaseModel does
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)


class BaseSettings(_SettingsBase, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    pass


class BaseSecrets(_SettingsBase, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    pass
