"""CLI application — Click commands for one-off analysis and session replay."""

from __future__ import annotations

import json
from typing import Any, Optional, TextIO

import click
from pydantic import ValidationError

from attune.analysis.lexicon import LexiconError
from attune.cli.formatters import analysis_table, context_table, get_console, sentiment_indicator
from attune.config import EmotionalContextConfig
from attune.context.aggregates import compute_sentiment_trend
from attune.context.tracker import ContextTracker
from attune.hints import suggest_response_hints
from attune.main import configure_logging


def _build_tracker(window: Optional[int] = None) -> ContextTracker:
    overrides: dict[str, Any] = {"enabled": True}
    if window is not None:
        overrides["history_window_size"] = window
    try:
        config = EmotionalContextConfig().with_overrides(overrides)
        return ContextTracker(config=config)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    except LexiconError as e:
        raise click.ClickException(str(e)) from e


def _emit_json(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@click.group()
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool, no_color: bool) -> None:
    """Attune - emotional context for conversations."""
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["no_color"] = no_color


@cli.command("analyze")
@click.argument("words", nargs=-1, required=True)
@click.pass_context
def analyze_cmd(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Analyze the emotion and sentiment of a single message."""
    tracker = _build_tracker()
    analysis = tracker.analyze_only(" ".join(words))
    if ctx.obj["json"]:
        _emit_json(analysis.to_dict())
        return
    console = get_console(no_color=ctx.obj["no_color"])
    console.print(analysis_table(analysis))
    console.print(sentiment_indicator(analysis.sentiment))


@cli.command("replay")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--session", "session_key", default="replay", show_default=True,
              help="Session key to accumulate under")
@click.option("--window", type=click.IntRange(min=1), default=None,
              help="Rolling window size (defaults to ATTUNE_HISTORY_WINDOW_SIZE)")
@click.pass_context
def replay_cmd(
    ctx: click.Context, source: TextIO, session_key: str, window: Optional[int]
) -> None:
    """Feed each line of SOURCE into one session and report its context.

    Use '-' to read from stdin. Blank lines are skipped.
    """
    tracker = _build_tracker(window)
    for line in source:
        message = line.strip()
        if message:
            tracker.process(session_key, message)

    context = tracker.get(session_key)
    if context is None:
        raise click.ClickException("No messages to replay.")

    direction = compute_sentiment_trend(context.sentiment_series())
    hints = suggest_response_hints(context.history[-1], context)

    if ctx.obj["json"]:
        _emit_json({
            "context": context.to_dict(),
            "direction": direction.value,
            "hints": hints.to_dict(),
        })
        return
    console = get_console(no_color=ctx.obj["no_color"])
    console.print(context_table(context, hints))
    console.print("direction:", sentiment_indicator(direction))
