"""CLI package for tart

Command-line boundary that picks between an existing token and the browser
OAuth flow.
"""

from cli.main import build_parser, run

__all__ = [
    "build_parser",
    "run",
]
