"""Command line interface (Typer).

Commands:
- `latest` (default): publish today's set of images.
- `day YYYY-MM-DD`: publish the set of a given day.
- `doctor ...`: environment diagnostics and bot token setup.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import typer
from rich.console import Console

from adapters.telegram import TelegramBot
from adapters.wallcat import WallcatClient
from cli import doctor
from cli.ui_components import build_summary_table, print_banner
from core.config import AppSettings
from core.dates import day_start_utc, now_utc, parse_day
from core.domain.errors import FeedError, RelayError
from core.domain.models import Channel, Image
from core.logging_config import setup_logging
from core.services.publish_pipeline import (
    STEP_ALBUM,
    STEP_DOCUMENTS,
    STEP_HEADING,
    STEP_LIST,
    PipelineHooks,
    PublishRequest,
    PublishResult,
    publish_for_a_day,
)

app = typer.Typer(
    help="Post images from https://beta.wall.cat to a Telegram channel.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

_STEP_LABELS = {
    STEP_LIST: "Fetching channels from wall.cat...",
    STEP_HEADING: "Sending heading...",
    STEP_ALBUM: "Sending album...",
    STEP_DOCUMENTS: "Sending documents",
}


@dataclass
class RunOptions:
    channel_id: str | None
    isolate_documents: bool
    verbose: bool


def _console_hooks(console: Console) -> PipelineHooks:
    def step_start(step: str) -> None:
        if step == STEP_DOCUMENTS:
            console.print(_STEP_LABELS[step])
        else:
            console.print(_STEP_LABELS[step], end="  ")

    def step_done(step: str) -> None:
        if step != STEP_DOCUMENTS:
            console.print("[green]OK[/green]")

    def image_skipped(channel: Channel, error: FeedError) -> None:
        console.print(f"\n [yellow]skip[/yellow] {channel.title}: {error}", end="")

    def document_sent(image: Image) -> None:
        console.print(f" - {image.channel.title}...  [green]OK[/green]")

    def document_failed(image: Image, error: RelayError) -> None:
        console.print(f" - {image.channel.title}...  [red]FAILED[/red] {error}")

    return PipelineHooks(
        step_start=step_start,
        step_done=step_done,
        image_skipped=image_skipped,
        document_sent=document_sent,
        document_failed=document_failed,
    )


async def _run(settings: AppSettings, request: PublishRequest) -> PublishResult:
    assert settings.bot_token is not None
    async with WallcatClient(settings) as feed, TelegramBot(settings.bot_token, settings) as bot:
        return await publish_for_a_day(
            feed=feed,
            bot=bot,
            request=request,
            hooks=_console_hooks(_console),
        )


def publish(options: RunOptions, date: str) -> None:
    """Run the pipeline for `date` and report the outcome."""

    settings = AppSettings()
    setup_logging(settings.log_level, verbose=options.verbose)

    if not options.channel_id:
        raise typer.BadParameter("--channel is required", param_hint="--channel")
    if not settings.bot_token:
        _console.print(
            "[red]BOT_TOKEN is not set.[/red] Export it, add it to .env, "
            "or run `wallcat-relay doctor setup-bot`."
        )
        raise typer.Exit(code=1)

    request = PublishRequest(
        chat_id=options.channel_id,
        date=date,
        crop_width=settings.crop_width,
        fetch_concurrency=settings.fetch_concurrency,
        isolate_documents=options.isolate_documents,
    )

    print_banner(_console, date)
    try:
        result = asyncio.run(_run(settings, request))
    except RelayError as exc:
        _console.print(f"\n[red]Error ({exc.kind}):[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if not result.published:
        _console.print("Nothing")
    _console.print(build_summary_table(result))
    _console.print("Done")
    if result.document_failures:
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    channel_id: str | None = typer.Option(
        None,
        "--channel",
        "-c",
        help='Channel identifier: "-1001146587123" or @somename',
    ),
    isolate_documents: bool = typer.Option(
        False,
        "--isolate-documents",
        help="Keep sending the remaining documents when one fails.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    ctx.obj = RunOptions(
        channel_id=channel_id,
        isolate_documents=isolate_documents,
        verbose=verbose,
    )
    if ctx.invoked_subcommand is None:
        publish(ctx.obj, now_utc())


@app.command()
def latest(ctx: typer.Context) -> None:
    """Send today's set of images."""

    publish(ctx.obj, now_utc())


@app.command()
def day(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="In format YEAR-MONTH-DAY. Example: 2019-12-01"),
) -> None:
    """Send the set of images of the selected day."""

    try:
        parsed = parse_day(date)
    except ValueError as exc:
        raise typer.BadParameter("date should be in format YYYY-MM-DD", param_hint="DATE") from exc
    publish(ctx.obj, day_start_utc(parsed))


def run() -> None:
    app()
