"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.wallcat import WallcatClient
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import FeedError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_feed(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with WallcatClient(settings) as feed:
            channels = await feed.list_channels()
    except FeedError as exc:
        return False, f"{exc.kind}: {exc}"
    return True, f"{len(channels)} channels"


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="wallcat-relay Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.bot_token:
        table.add_row("Bot token", "OK", _mask(settings.bot_token))
    else:
        table.add_row("Bot token", "MISSING", "Set BOT_TOKEN or run `doctor setup-bot`")
    table.add_row("Feed base_url", "OK", settings.feed_base_url)
    table.add_row("Telegram base_url", "OK", settings.telegram_base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    # Connectivity (best-effort)
    ok_feed, detail_feed = asyncio.run(_check_feed(settings))
    table.add_row("Feed API", "OK" if ok_feed else "FAIL", detail_feed)

    _console.print(table)

    if not settings.bot_token or not ok_feed:
        raise typer.Exit(code=1)


@app.command(name="setup-bot")
def setup_bot() -> None:
    """Interactive bot setup (stores the token in the user config .env)."""

    token = typer.prompt("Bot token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({"WALLCAT_BOT_TOKEN": token})

    _console.print(f"[green]Saved bot token to:[/green] {env_path}")
