import functools
import getpass
import os
import typing as t
from pathlib import Path

import pydantic as p
import yaml
from ansible.parsing.vault import VaultLib, VaultSecret
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings import SettingsError

from notefeed.model import DeploymentEnvironment

VAULT_PASSWORD_ENV = "NOTEFEED_VAULT_PASSWORD"


class CurrentState(t.TypedDict, total=False):
    root: t.Required[p.AnyUrl]
    env: t.Required[DeploymentEnvironment]


class SettingsCurrentState(CurrentState, total=False):
    override: t.Required[tuple[str, ...]]


def env_path(root: p.AnyUrl, env: DeploymentEnvironment) -> Path:
    assert root.scheme == "file" and root.path is not None, "root is not a legible location of YAML files"
    rootp = Path(root.path)
    if env is not DeploymentEnvironment.Local:
        # there is no special directory for local/, that's just the root
        return rootp / "env.d" / env.value
    return rootp


class SettingsSource(PydanticBaseSettingsSource):
    skip_keys: t.ClassVar[frozenset[str]] = frozenset({"env", "root", "override"})

    def __call__(self) -> dict[str, t.Any]:
        # we expect init kwargs to have config root and env in them
        data: dict[str, t.Any] = {}

        for field_name, field in self.settings_cls.model_fields.items():
            if field_name in self.skip_keys:
                continue
            try:
                field_value, field_key, value_is_complex = self.get_field_value(field, field_name)
                field_value = self.prepare_field_value(field_name, field, field_value, value_is_complex)
            except KeyError:
                continue
            except ValueError as e:
                raise SettingsError(f"error parsing value for field {field_name!r} from source {self!r}") from e
            except Exception as e:
                raise SettingsError(f"error getting value for field {field_name!r} from source {self!r}") from e

            data[field_key] = field_value
        return data

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        return value


class OverrideSettingsSource(SettingsSource):
    """`key.path=value` pairs given on the command line; values are parsed as YAML."""

    @functools.cached_property
    def parsed_options(self) -> dict[str, t.Any]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        od: dict[str, t.Any] = {}
        for o in current_state.get("override", ()):
            k, v = [s.strip() for s in o.split("=", 1)]

            target = od
            path = k.split(".")
            for key in path[:-1]:
                target = target.setdefault(key, {})
            target[path[-1]] = yaml.safe_load(v)
        return od

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        if field_name not in self.parsed_options:
            raise KeyError(field_name)
        value = self.parsed_options[field_name]
        return value, field_name, isinstance(value, dict)


class YAMLCascadingSettingsSource(SettingsSource):
    """Reads `<root>/<field>.yaml`, shadowed by `<root>/env.d/<env>/<field>.yaml`."""

    @functools.cached_property
    def load_paths(self) -> list[Path]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        root = current_state["root"]
        env = current_state["env"]
        paths = [env_path(root, DeploymentEnvironment.Local)]
        if env is not DeploymentEnvironment.Local:
            paths.append(env_path(root, env))
        return paths

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        yamls: list[str] = []
        for path in self.load_paths:
            fn = path / f"{field_name}.yaml"
            if fn.exists():
                yamls.append(fn.read_text(encoding="utf8"))
        if not yamls:
            raise KeyError(field_name)
        return yamls, field_name, True

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        # complex values are the list of YAML documents found along load_paths;
        # the most specific one wins
        if not isinstance(value, list):
            raise ValueError(field_name)
        yamls = t.cast(list[str], value)
        return yaml.safe_load(yamls[-1])


class AnsibleVaultSecretsSource(SettingsSource):
    """Decrypts `secrets.vault.yaml` from the environment's config directory.

    The vault password is read from `NOTEFEED_VAULT_PASSWORD`, or prompted for.
    """

    @functools.cached_property
    def load_path(self) -> Path:
        current_state = t.cast(CurrentState, self.current_state)
        return env_path(current_state["root"], current_state["env"])

    @functools.cached_property
    def secrets(self) -> dict[str, t.Any]:
        current_state = t.cast(CurrentState, self.current_state)
        env = current_state["env"]
        fn = "secrets.vault.yaml"
        vp = self.load_path / fn

        # no vault, no password prompt
        if not vp.exists():
            return {}

        key = os.environ.get(VAULT_PASSWORD_ENV) or getpass.getpass(f"provide vault key ({env.value}:{fn}) ")

        # INFO: None is the vault-id -- if we start using a vault ID, we need to specify it here
        vault = VaultLib(secrets=[(None, VaultSecret(key.encode()))])
        with vp.open() as f:
            content = vault.decrypt(f.read())
            return yaml.safe_load(content) or {}

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        if field_name not in self.secrets:
            raise KeyError(field_name)
        value = self.secrets[field_name]
        return value, field_name, isinstance(value, dict)
