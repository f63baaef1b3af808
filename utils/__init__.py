"""Shared utilities package for tart"""

from .console import (
    DebugCapturingConsole,
    create_console,
    setup_logging,
)

__all__ = [
    "DebugCapturingConsole",
    "create_console",
    "setup_logging",
]
