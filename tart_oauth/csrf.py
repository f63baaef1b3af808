"""CSRF state token for the OAuth ``state`` parameter"""

import hmac
import secrets
from typing import Optional


def mint_csrf_token() -> str:
    """
    Generate a random 128-bit state value.

    Returns:
        str: The value rendered as a decimal string
    """
    return str(secrets.randbits(128))


def state_matches(expected: str, actual: Optional[str]) -> bool:
    """Compare a received ``state`` to the minted one in constant time"""
    if actual is None:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
