"""CLI entry point and argument parsing"""

import sys
import argparse
from typing import Optional, Sequence
from rich.console import Console
from rich.markup import escape

import settings
from config import ExistingToken, resolve_token_spec
from tart_oauth import AuthCoordinator, AuthError, TokenExchanger, TokenPair, mask_token
from utils.console import create_console, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tart",
        description="Obtain a Twitch user access token through the browser OAuth flow",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="The oauth access token, if you already have it. "
             "Either this or all of --app-id, --app-secret and --address are required",
    )
    parser.add_argument("--app-id", default=None, help="Application client ID (env: TART_CLIENT_ID)")
    parser.add_argument("--app-secret", default=None, help="Application client secret (env: TART_CLIENT_SECRET)")
    parser.add_argument(
        "--address",
        default=None,
        help="Address to use for local server. Needs to match the one set in the Twitch dev console",
    )
    parser.add_argument("--scope", default=None, help=f"OAuth scopes (default: {settings.SCOPE})")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the browser redirect (default: wait forever)",
    )
    parser.add_argument("--show-tokens", action="store_true", help="Print tokens unmasked")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    return parser


def _print_tokens(console: Console, tokens: TokenPair, show: bool) -> None:
    render = (lambda t: t) if show else mask_token
    console.print(f"[bold]access_token:[/bold] {escape(render(tokens.access_token))}")
    # Printed for the caller to keep; renewal is not handled here
    if tokens.refresh_token:
        console.print(f"[bold]refresh_token:[/bold] {escape(render(tokens.refresh_token))}")


def run(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """Parse arguments, obtain a token and return the process exit code"""
    args = build_parser().parse_args(argv)

    debug_logger = setup_logging(settings.LOG_LEVEL, settings.DEBUG_LOG_FILE if args.debug else None)
    console = console or create_console(debug_logger)

    timeout = args.timeout if args.timeout is not None else settings.CALLBACK_TIMEOUT
    try:
        spec = resolve_token_spec(
            token=args.token or settings.TOKEN,
            app_id=args.app_id or settings.CLIENT_ID,
            app_secret=args.app_secret or settings.CLIENT_SECRET,
            address=args.address or settings.ADDRESS,
            scope=args.scope or settings.SCOPE,
        )

        if isinstance(spec, ExistingToken):
            console.print("[green][OK][/green] Using provided access token")
            tokens = TokenPair(access_token=spec.access_token, refresh_token="")
        else:
            console.print("\n[bold]Opening browser for Twitch authentication...[/bold]")
            coordinator = AuthCoordinator(
                exchanger=TokenExchanger(base_url=settings.AUTH_BASE_URL, timeout=settings.EXCHANGE_TIMEOUT),
                auth_base_url=settings.AUTH_BASE_URL,
                timeout=timeout or None,
            )
            tokens = coordinator.authorize_sync(spec)
            console.print("[green][OK][/green] Authentication successful!")

    except AuthError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Authentication cancelled by user[/yellow]")
        return 130

    _print_tokens(console, tokens, args.show_tokens)
    return 0


def main():
    """Entry point for the CLI"""
    sys.exit(run())


if __name__ == "__main__":
    main()
