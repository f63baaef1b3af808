"""
Twitch OAuth authorization URL construction
"""
from urllib.parse import urlencode, urljoin

from .constants import TWITCH_AUTH_BASE_URL


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    scope: str,
    state: str,
    base_url: str = TWITCH_AUTH_BASE_URL,
) -> str:
    """
    Build the URL the user is sent to for approving access.

    Args:
        client_id: Application client ID
        redirect_uri: Where the provider redirects with the code
        scope: Space separated OAuth scopes
        state: CSRF state token echoed back on the redirect
        base_url: Provider OAuth base, ending in a slash

    Returns:
        str: Full authorization URL
    """
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": scope,
        "force_verify": "true",
        "state": state,
    }

    return f"{urljoin(base_url, 'authorize')}?{urlencode(params)}"
