"""Tests for settings loading in notefeed.core.config."""

from __future__ import annotations

import os
from pathlib import Path

import pydantic as p
import pytest

import notefeed
from notefeed.core import NotefeedContainer, Secrets, Settings
from notefeed.core.config import FeedbackSettings
from notefeed.feedback import FeedbackSyncService
from notefeed.lib.vendor.onenote import OneNoteClient
from notefeed.model import DeploymentEnvironment

CONFIG_ROOT = p.FileUrl(f"file://{Path(os.path.dirname(notefeed.__file__)).parent}/config")


class TestSettings(object):
    def test_local_environment(self) -> None:
        settings = Settings(env=DeploymentEnvironment.Local, root=CONFIG_ROOT, override=())

        assert settings.storage.persistent.database.driver == "postgresql+psycopg"
        assert settings.vendor.onenote.timeout == 30.0
        assert settings.feedback.max_summary_files == 5

    def test_environment_shadows_root(self) -> None:
        settings = Settings(env=DeploymentEnvironment.Test, root=CONFIG_ROOT, override=())

        assert settings.storage.persistent.database.driver == "sqlite"
        assert settings.vendor.onenote.client_id == "test-client"
        # feedback.yaml has no test variant
        assert settings.feedback.component == "assignfeedback_onenote"

    def test_override(self) -> None:
        settings = Settings(
            env=DeploymentEnvironment.Test,
            root=CONFIG_ROOT,
            override=("feedback.max_summary_files=10", "vendor.onenote.timeout=2.5"),
        )

        assert settings.feedback.max_summary_files == 10
        assert settings.vendor.onenote.timeout == 2.5
        # untouched siblings keep their configured values
        assert settings.vendor.onenote.client_id == "test-client"

    def test_invalid_override_rejected(self) -> None:
        with pytest.raises(p.ValidationError):
            Settings(env=DeploymentEnvironment.Test, root=CONFIG_ROOT, override=("feedback.max_summary_files=-1",))

    def test_authorize_url(self) -> None:
        settings = Settings(env=DeploymentEnvironment.Test, root=CONFIG_ROOT, override=())
        assert settings.vendor.onenote.authorize_url == (
            "https://login.microsoftonline.com/common/oauth2/v2.0/authorize"
        )

    def test_secrets_without_vault(self) -> None:
        secrets = Secrets(env=DeploymentEnvironment.Test, root=CONFIG_ROOT)

        assert secrets.onenote.access_token is None
        assert secrets.database.password is None
        assert set(type(secrets.onenote).model_fields) == {"access_token"}


class TestVersion(object):
    def test_version_from_file(self) -> None:
        version_file = Path(os.path.dirname(notefeed.__file__)).parent / "VERSION.txt"

        assert notefeed.__version__ == version_file.read_text().strip()


class TestContainer(object):
    def test_feedback_service_is_wired(self, container: NotefeedContainer) -> None:
        service = container.feedback().service()

        assert isinstance(service, FeedbackSyncService)
        assert service is container.feedback().service()
        assert isinstance(container.vendor().onenote().client(), OneNoteClient)

    def test_feedback_settings(self, container: NotefeedContainer) -> None:
        settings = FeedbackSettings(container.config.feedback())
        assert settings.max_summary_files == 5

    def test_onenote_unsigned_without_token(self, container: NotefeedContainer) -> None:
        assert container.vendor().onenote().client().has_valid_session() is False
