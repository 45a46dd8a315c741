"""
publana-admin - local admin console for API tokens.

Operates on the configured option store directly (same STORAGE_BACKEND and
REDIS_* settings as the API server), so it works without the server running.

    publana-admin generate
    publana-admin list [--reveal]
    publana-admin revoke TOKEN
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from publana.config.provider import EnvConfigProvider
from publana.modules.storage import OptionStore, create_option_store
from publana.modules.tokens import TokenConsole, TokenStore

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="publana-admin",
        description="Generate, list and revoke Publana API tokens",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("generate", help="Generate a new API token")

    list_parser = subparsers.add_parser("list", help="List API tokens")
    list_parser.add_argument("--reveal", action="store_true", help="Show full token values")

    revoke_parser = subparsers.add_parser("revoke", help="Revoke an API token")
    revoke_parser.add_argument("token", help="Full token value to revoke")

    return parser


async def run(args: argparse.Namespace, option_store: OptionStore, option_key: str) -> int:
    """Execute one console command. Returns the process exit code."""
    store = TokenStore(option_store, option_key=option_key)
    token_console = TokenConsole(store)
    await store.ensure_initialized()

    if args.command == "generate":
        token, created_at = await token_console.generate()
        console.print("[green]New token generated successfully.[/green]")
        console.print(f"[bold]{token}[/bold]")
        console.print(f"[dim]Created {created_at}. Store it now; it is masked in listings.[/dim]")
        return 0

    if args.command == "revoke":
        if await token_console.revoke(args.token.strip()):
            console.print("[green]Token revoked successfully.[/green]")
        else:
            console.print("[yellow]Token not found; nothing to revoke.[/yellow]")
        return 0

    entries = await token_console.list(reveal=args.reveal)
    if not entries:
        console.print("No API tokens yet. Run [bold]publana-admin generate[/bold] to create one.")
        return 0

    table = Table(title=f"API Tokens ({len(entries)})")
    table.add_column("#", justify="right")
    table.add_column("Token")
    for index, token in entries:
        table.add_row(str(index), token)
    console.print(table)
    return 0


async def _main(argv: Optional[List[str]]) -> int:
    args = build_parser().parse_args(argv)
    storage_config = EnvConfigProvider().get_storage_config()
    option_store = create_option_store(storage_config)
    try:
        return await run(args, option_store, storage_config.token_option_key)
    finally:
        await option_store.close()


def main(argv: Optional[List[str]] = None) -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(_main(argv)))


if __name__ == "__main__":
    main()
