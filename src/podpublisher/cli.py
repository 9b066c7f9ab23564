"""CLI entry point for Podpublisher."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from podpublisher.config.logging import setup_logging
from podpublisher.config.manager import ConfigManager
from podpublisher.models import EpisodeRequest, PipelineResult
from podpublisher.pipeline import PipelineOrchestrator
from podpublisher.utils.errors import ConfigError

USAGE = "Usage: podpublisher run <audio_file> <content_url> <publish_date> <publish_time>"

app = typer.Typer(
    name="podpublisher",
    help="Publish a recording as a scheduled podcast episode",
    no_args_is_help=True,
)
# stdout carries only the result line
console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """Podpublisher - turn a recording and a web page into a podcast episode."""
    ctx.obj = {"verbose": verbose, "log_file": log_file}
    setup_logging(verbose=verbose, log_file=log_file)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from podpublisher import __version__

    console.print(f"[bold cyan]Podpublisher[/bold cyan] v{__version__}")


@app.command("run")
def run_command(
    ctx: typer.Context,
    audio_file: Path | None = typer.Argument(None, help="Recording to publish"),
    content_url: str | None = typer.Argument(None, help="Reference page for metadata"),
    publish_date: str | None = typer.Argument(None, help="Publish date (YYYY-MM-DD)"),
    publish_time: str | None = typer.Argument(
        None, help="Publish time (HH:MM) in the source timezone"
    ),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="YAML config file"
    ),
    env_file: Path | None = typer.Option(
        None, "--env-file", help="Environment file (default: .env)"
    ),
    timezone: str | None = typer.Option(
        None, "--timezone", "-z", help="Timezone of the publish date/time"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Where to write the converted MP3 (default: cwd)"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 when publishing fails"
    ),
) -> None:
    """Generate metadata, convert the recording and upload the episode.

    The final result is printed to stdout as one JSON object.

    Examples:
        podpublisher run episode42.wav https://example.com/post 2023-05-15 10:30

        podpublisher run episode42.wav https://example.com/post 2023-05-15 10:30 --strict
    """
    if not audio_file or not content_url or not publish_date or not publish_time:
        console.print(USAGE, markup=False)
        sys.exit(1)

    try:
        config = ConfigManager(config_file=config_file, env_file=env_file).load_config(
            source_timezone=timezone,
            output_dir=output_dir,
        )
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    # Re-apply the configured level unless --verbose already asked for DEBUG
    options = ctx.obj or {}
    if not options.get("verbose"):
        setup_logging(log_file=options.get("log_file"), level=config.log_level)

    request = EpisodeRequest(
        audio_file_path=audio_file,
        content_url=content_url,
        publish_date=publish_date,
        publish_time=publish_time,
    )

    def handle_progress(step_name: str, step_data: dict[str, Any]) -> None:
        if step_name == "metadata_start":
            console.print("[bold]Step 1/4:[/bold] Generating metadata...")
        elif step_name == "metadata_complete":
            console.print(f"[green]✓[/green] Title: {step_data['title']}", markup=False)
        elif step_name == "probe_start":
            console.print("\n[bold]Step 2/4:[/bold] Measuring duration...")
        elif step_name == "probe_complete":
            if step_data["probed"]:
                console.print(f"[green]✓[/green] {step_data['duration_minutes']} minutes")
            else:
                console.print("[yellow]⚠[/yellow] Duration unknown, reporting 0 minutes")
        elif step_name == "conversion_start":
            console.print("\n[bold]Step 3/4:[/bold] Converting to MP3...")
        elif step_name == "conversion_complete":
            console.print(f"[green]✓[/green] Wrote [cyan]{step_data['path']}[/cyan]")
        elif step_name == "upload_start":
            console.print("\n[bold]Step 4/4:[/bold] Uploading episode...")
        elif step_name == "upload_complete":
            console.print("[green]✓[/green] Uploaded")
        elif step_name == "failed":
            console.print(f"\n[red]✗[/red] {step_data['type']}: {step_data['error']}")

    orchestrator = PipelineOrchestrator(config)
    result = asyncio.run(orchestrator.run(request, progress_callback=handle_progress))

    print_result(result)

    if strict and not result.success:
        sys.exit(1)


def print_result(result: PipelineResult) -> None:
    """Print the result record to stdout as one JSON line."""
    typer.echo(json.dumps(result.to_output(), ensure_ascii=False, default=str))


if __name__ == "__main__":
    app()
