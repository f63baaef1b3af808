"""Data models for the Twitch OAuth flow"""

from dataclasses import dataclass
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, StrictStr

from .constants import DEFAULT_SCOPE


class SocketAddress(NamedTuple):
    """Concrete address the callback server listens on"""
    host: str
    port: int


@dataclass(frozen=True)
class TokenPair:
    """Tokens returned by the token endpoint

    Attributes:
        access_token: Bearer token for API calls
        refresh_token: Token for obtaining new access tokens later
    """
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class AuthRequest:
    """Everything one authorization flow needs, fixed for its lifetime

    Attributes:
        listen_address: Resolved address for the local callback server
        redirect_uri: Redirect URI registered with the provider
        client_id: Application client ID
        client_secret: Application client secret
        scope: Space separated OAuth scopes
    """
    listen_address: SocketAddress
    redirect_uri: str
    client_id: str
    client_secret: str
    scope: str = DEFAULT_SCOPE

    @classmethod
    def from_address(
        cls,
        address: str,
        client_id: str,
        client_secret: str,
        scope: str = DEFAULT_SCOPE,
    ) -> "AuthRequest":
        """Resolve ``address`` and use it verbatim as the redirect URI

        Raises:
            AddressError: If the address cannot be resolved
        """
        from .address import resolve_address

        return cls(
            listen_address=resolve_address(address),
            redirect_uri=address,
            client_id=client_id,
            client_secret=client_secret,
            scope=scope,
        )

    def __repr__(self) -> str:
        return (
            f"AuthRequest(listen_address={self.listen_address!r}, "
            f"redirect_uri={self.redirect_uri!r}, client_id={self.client_id!r}, "
            f"client_secret='***', scope={self.scope!r})"
        )


class TokenResponse(BaseModel):
    """Token endpoint JSON body; both fields must be strings"""
    model_config = ConfigDict(extra="ignore")

    access_token: StrictStr
    refresh_token: StrictStr


def mask_token(token: str, visible: int = 4) -> str:
    """Mask a secret for display, keeping the last few characters"""
    if len(token) <= visible:
        return "*" * len(token)
    return "*" * (len(token) - visible) + token[-visible:]
