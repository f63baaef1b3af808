"""Configuration management package for tart"""

from .loader import ConfigLoader, get_config_loader
from .token_spec import ExistingToken, TokenSpec, resolve_token_spec

__all__ = [
    "ConfigLoader",
    "get_config_loader",
    "ExistingToken",
    "TokenSpec",
    "resolve_token_spec",
]
