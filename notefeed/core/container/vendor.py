from __future__ import annotations

import pydantic as p
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Object, Provider, Singleton

from notefeed.lib.vendor.onenote import OneNoteClient, OneNoteSession

from ..config.vendor import OneNoteSettings
from ..provider import TimestampProvider


class OneNoteContainer(DeclarativeContainer):
    @staticmethod
    def provide_session(access_token: p.Secret[str] | str | None) -> OneNoteSession:
        return OneNoteSession(access_token=access_token)

    @staticmethod
    def provide_client(config: OneNoteSettings, session: OneNoteSession, utcnow: TimestampProvider) -> OneNoteClient:
        return OneNoteClient(
            session=session,
            base_url=config.graph_url,
            authorize_url=config.authorize_url,
            client_id=config.client_id,
            redirect_uri=config.redirect_uri,
            scopes=config.scopes,
            timeout=config.timeout,
            utcnow=utcnow,
        )

    settings: Provider[OneNoteSettings] = Object()
    secrets: Configuration = Configuration()
    utcnow: Provider[TimestampProvider] = Object()

    session: Provider[OneNoteSession] = Singleton(provide_session, access_token=secrets.access_token)
    client: Provider[OneNoteClient] = Singleton(provide_client, config=settings, session=session, utcnow=utcnow)


class VendorContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()
    utcnow: Provider[TimestampProvider] = Object()

    onenote: Provider[OneNoteContainer] = Container(
        OneNoteContainer, settings=config.onenote.as_(OneNoteSettings), secrets=secrets.onenote, utcnow=utcnow
    )
