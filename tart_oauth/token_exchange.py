"""OAuth token exchange for Twitch authentication"""

import logging
from typing import Optional
from urllib.parse import urljoin

import httpx
from pydantic import ValidationError

from .constants import EXCHANGE_TIMEOUT, TWITCH_AUTH_BASE_URL
from .errors import EmptyAccessTokenError, ExchangeParseError, ExchangeTransportError
from .models import TokenPair, TokenResponse

logger = logging.getLogger(__name__)


async def exchange_code_for_tokens(
    base_url: str,
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    code: str,
    *,
    timeout: float = EXCHANGE_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TokenPair:
    """Exchange authorization code for access and refresh tokens

    Parameters travel in the query string of a body-less POST, which is what
    the Twitch token endpoint accepts.

    Args:
        base_url: Provider OAuth base; ``token`` is joined onto it
        client_id: Application client ID
        client_secret: Application client secret
        redirect_uri: Redirect URI used for the authorization request
        code: Authorization code from the callback
        timeout: Request timeout in seconds
        transport: Optional httpx transport, mainly for tests

    Returns:
        TokenPair with the issued tokens

    Raises:
        ExchangeTransportError: Request failed or returned a non-success status
        ExchangeParseError: Response was not the expected JSON object
        EmptyAccessTokenError: Response parsed but access_token was empty
    """
    token_url = urljoin(base_url, "token")
    params = {
        "client_id": client_id,
        "client_secret": client_secret,
        "redirect_uri": redirect_uri,
        "code": code,
        "grant_type": "authorization_code",
    }

    logger.info(f"Exchanging authorization code for tokens at {token_url}")

    try:
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.post(token_url, params=params)
    except httpx.TimeoutException as e:
        raise ExchangeTransportError(f"Token exchange timed out after {timeout} seconds") from e
    except httpx.RequestError as e:
        raise ExchangeTransportError(f"Token exchange request failed: {e}") from e

    logger.debug(f"Token exchange response status: {response.status_code}")

    if not response.is_success:
        raise ExchangeTransportError(
            f"Token exchange failed with status {response.status_code}: {response.text}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise ExchangeParseError("Token exchange response was not valid JSON") from e

    try:
        tokens = TokenResponse.model_validate(payload)
    except ValidationError as e:
        raise ExchangeParseError() from e

    if not tokens.access_token:
        raise EmptyAccessTokenError()

    logger.info("Successfully exchanged authorization code for tokens")
    return TokenPair(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


class TokenExchanger:
    """Binds the provider endpoint and HTTP settings for exchanging codes"""

    def __init__(
        self,
        base_url: str = TWITCH_AUTH_BASE_URL,
        timeout: float = EXCHANGE_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def exchange(self, client_id: str, client_secret: str, redirect_uri: str, code: str) -> TokenPair:
        return await exchange_code_for_tokens(
            self.base_url,
            client_id,
            client_secret,
            redirect_uri,
            code,
            timeout=self.timeout,
            transport=self.transport,
        )
