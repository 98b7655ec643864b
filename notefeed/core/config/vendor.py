from __future__ import annotations

from .base import BaseSettings


class OneNoteSettings(BaseSettings):
    """Microsoft Graph application registration used to reach OneNote."""

    tenant: str = "common"
    client_id: str
    redirect_uri: str
    scopes: tuple[str, ...] = ("offline_access", "User.Read", "Notes.ReadWrite.All")
    graph_url: str = "https://graph.microsoft.com/v1.0"
    login_url: str = "https://login.microsoftonline.com"
    # seconds to wait on Graph before an export is given up
    timeout: float = 30.0

    @property
    def authorize_url(self) -> str:
        return f"{self.login_url.rstrip('/')}/{self.tenant}/oauth2/v2.0/authorize"


class VendorSettings(BaseSettings):
    onenote: OneNoteSettings
