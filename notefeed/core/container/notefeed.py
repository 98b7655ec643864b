from __future__ import annotations

import datetime
import os
import tempfile
import types
import typing as t
from pathlib import Path

import pydantic as p
import xdg_base_dirs as xdg
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Object, Provider, Resource, Singleton

import notefeed
from notefeed.model import BaseModel, DeploymentEnvironment

from ..config import FeedbackSettings, Secrets, Settings
from ..di import NotReady
from ..provider import LoggingProvider, TimestampProvider
from .feedback import FeedbackContainer
from .storage import StorageContainer
from .vendor import VendorContainer


def provide_xdg_runtime() -> t.Generator[Path]:
    """Per-run scratch directory; removed on shutdown when we had to create it."""
    rtp = xdg.xdg_runtime_dir()
    if rtp:
        yield rtp
    else:
        rtp = Path(tempfile.mkdtemp(prefix="notefeed-"))
        yield rtp
        os.rmdir(rtp)


def provide_xdg_state() -> Path:
    stp = xdg.xdg_state_home() / "notefeed"
    stp.mkdir(parents=True, exist_ok=True)
    return stp


class BootConfiguration(BaseModel):
    debug: bool
    env: DeploymentEnvironment
    config_root: p.AnyUrl
    secrets_path: p.AnyUrl | None = None
    override: tuple[str, ...]


class NotefeedContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()

    debug: Provider[bool] = Singleton(bool)
    env: Provider[DeploymentEnvironment] = Singleton(DeploymentEnvironment)
    root: Object[NotReady | Path] = Object(NotReady())
    runtime_path: Provider[Path] = Resource(provide_xdg_runtime)
    state_path: Provider[Path] = Resource(provide_xdg_state)
    utcnow: Provider[TimestampProvider] = Object(lambda: datetime.datetime.now(datetime.UTC))

    logging: Provider[LoggingProvider] = Resource(LoggingProvider, config=config.logging, debug=debug)
    storage: Provider[StorageContainer] = Container(
        StorageContainer, config=config.storage, secrets=secrets, logging=logging, root=root, state_path=state_path
    )
    vendor: Provider[VendorContainer] = Container(
        VendorContainer, config=config.vendor, secrets=secrets, utcnow=utcnow
    )
    feedback: Provider[FeedbackContainer] = Container(
        FeedbackContainer,
        settings=config.feedback.as_(FeedbackSettings),
        client=vendor.provided.onenote.client.call(),
        files=storage.provided.files.call(),
        session_factory=storage.provided.persistent.session,
        utcnow=utcnow,
        runtime_path=runtime_path,
    )

    _boot_config: Provider[BootConfiguration | NotReady] = Object(NotReady())

    @staticmethod
    def boot(
        ct: NotefeedContainer,
        /,
        debug: bool,
        env: DeploymentEnvironment,
        config_root: p.FileUrl,
        secrets_path: p.AnyUrl | None = None,
        override: tuple[str, ...] | None = None,
        wiring: tuple[str | types.ModuleType, ...] | None = None,
    ):
        if config_root.scheme != "file":
            raise ValueError(f"unsupported scheme for config root: {config_root.scheme}")
        ps = Settings(env=env, root=config_root, override=override or ())
        ct.config.from_pydantic(ps)
        ct.wire(packages=["notefeed.storage"])
        if wiring:
            ct.wire(modules=wiring)

        logger = ct.logging().get_logger()

        for ov in ps.override:
            k, v = ov.split("=", 1)
            logger.info(
                "overriding configuration parameter",
                extra={
                    "key": k,
                    "value": v,
                },
            )

        ct.debug.override(debug)
        ct.env.override(env)
        ct.root.override(Path(os.path.dirname(notefeed.__file__)).parent)

        secrets = Secrets(env=env, root=secrets_path or config_root)
        ct.secrets.from_pydantic(secrets)

        logger.debug(
            "configuration finished",
            extra={
                "config": str(config_root),
                "env": env,
            },
        )
        ct._boot_config.override(
            BootConfiguration(
                debug=debug, env=env, config_root=config_root, secrets_path=secrets_path, override=override or ()
            )
        )
