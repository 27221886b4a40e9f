"""Command-line tools for exercising the mentions listener."""

import logging
import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from mentions_listener.config import MentionsConfig
from mentions_listener.config import load_config
from mentions_listener.console import console
from mentions_listener.console import render_buffer
from mentions_listener.errors import MentionsError
from mentions_listener.logging_setup import init_json_logging
from mentions_listener.replay import load_script
from mentions_listener.replay import replay
from mentions_listener.triggers import TriggerDetector

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="mentions-listener")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write JSONL logs to this file")
@click.option("--log-level", default=None, help="Log level for the JSONL sink (default: INFO)")
def cli(log_file: str | None, log_level: str | None):
    """Mentions listener developer tools."""
    if log_file or log_level:
        init_json_logging(log_file, log_level)


@cli.command("replay")
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file overriding the script's mentions section",
)
@click.option("--events/--no-events", default=True, help="Show the emitted lifecycle events")
def replay_command(script: Path, config_path: Path | None, events: bool):
    """Replay an editing script and show the resulting text and mentions.

    Examples:
        mentions-listener replay session.yaml
        mentions-listener replay session.yaml --config settings.yaml
    """
    try:
        config = load_config(config_path) if config_path else None
        result = replay(load_script(script), config)
    except MentionsError as e:
        logger.error(f"Replay of {script} failed: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if events:
        table = Table(title="Events", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right")
        table.add_column("Event")
        table.add_column("Details")
        for index, event in enumerate(result.events, start=1):
            details = ", ".join(f"{k}={v!r}" for k, v in event.model_dump(exclude={"type"}).items())
            table.add_row(str(index), event.type, escape(details))
        console.print(table)

    mentions = Table(title="Mentions", show_header=True, header_style="bold cyan")
    mentions.add_column("Name")
    mentions.add_column("Location", justify="right")
    mentions.add_column("Length", justify="right")
    mentions.add_column("Id")
    for mention in result.listener.mentions:
        mentions.add_row(escape(mention.display_name), str(mention.start), str(mention.length), escape(str(mention.id)))
    console.print(mentions)

    console.print(render_buffer(result.buffer))


@cli.command("detect")
@click.argument("text")
@click.option("--caret", type=int, default=None, help="Caret offset (default: end of text)")
@click.option("--trigger", "triggers", multiple=True, help="Trigger character (repeatable, default: @)")
@click.option("--search-spaces", is_flag=True, help="Allow spaces inside the query")
def detect_command(text: str, caret: int | None, triggers: tuple[str, ...], search_spaces: bool):
    """Show the mention search the text before the caret would open."""
    try:
        config = MentionsConfig(trigger_characters=triggers or {"@"}, search_spaces_in_query=search_spaces)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--trigger") from e

    detector = TriggerDetector(config.trigger_characters, config.search_spaces_in_query)
    search = detector.detect(text, len(text) if caret is None else caret)
    if search is None:
        console.print("[yellow]No mention search[/yellow]")
        return
    console.print(f"Trigger [bold]{escape(search.trigger)}[/bold] at {search.trigger_offset}, query: {escape(repr(search.query))}")


def main():
    cli()


if __name__ == "__main__":
    main()
