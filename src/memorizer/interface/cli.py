"""memorizer CLI — deck management, reviews, and multiple-choice quizzes."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from memorizer.application.config import AppConfig, resolve_config
from memorizer.application.factory import get_study_service
from memorizer.application.labels import format_due_label, format_interval_label
from memorizer.application.utils.rating import coerce_rating
from memorizer.application.utils.time import now_utc
from memorizer.domain.errors import MemorizerError
from memorizer.domain.models import Rating

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="memorizer: spaced-repetition vocabulary trainer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage memorizer configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
_LOG_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO}


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    deck: Annotated[
        Path | None, typer.Option("--deck", help="Deck file. Defaults to 'deck_path' in config.")
    ] = None,
):
    """Global settings for memorizer."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"deck_path": deck, "verbose": verbose + 1}
    logging.getLogger().setLevel(_LOG_LEVELS.get(verbose + 1, logging.DEBUG))


def _config(ctx: typer.Context) -> AppConfig:
    return resolve_config((ctx.obj or {}).get("overrides"))


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg="red")
    raise typer.Exit(1)


def _parse_rating(value: str) -> Rating:
    rating = coerce_rating(value)
    if rating is None:
        by_name = value.strip().upper()
        if by_name in Rating.__members__:
            return Rating[by_name]
        _fail(f"Invalid rating {value!r}. Use 1-4 or again/hard/good/easy.")
    return rating


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="Word or phrase to learn.")],
    meaning: Annotated[str, typer.Argument(help="Meaning shown on the back of the card.")],
    notes: Annotated[str | None, typer.Option(help="Optional notes.")] = None,
):
    """[bold green]Add[/bold green] a new card, due immediately."""
    service = get_study_service(_config(ctx))
    try:
        card = service.add_card(word, meaning, now_utc(), notes)
    except MemorizerError as e:
        _fail(str(e))
    typer.secho(f"Added {card.word!r} ({card.id})", fg="green")


@app.command()
def due(ctx: typer.Context):
    """List cards due for review now."""
    config = _config(ctx)
    service = get_study_service(config)
    now = now_utc()
    try:
        queue = service.due_queue(now)
        upcoming = service.upcoming_count(now)
    except MemorizerError as e:
        _fail(str(e))

    if not queue:
        typer.secho("Nothing due.", fg="green")
    for card in queue:
        typer.echo(f"{card.id}  {card.word}  [{card.state.value}]  {format_due_label(card.due_at, now)}")
    typer.echo(f"Upcoming in {config.upcoming_window_hours:g}h: {upcoming}")


@app.command()
def preview(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card id.")],
):
    """Show the interval each rating would schedule."""
    service = get_study_service(_config(ctx))
    try:
        intervals = service.preview(card_id, now_utc())
    except MemorizerError as e:
        _fail(str(e))
    for rating, days in intervals.items():
        typer.echo(f"{rating.value} {rating.name.title():<5} {format_interval_label(days)}")


@app.command()
def review(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card id.")],
    rating: Annotated[str, typer.Argument(help="1-4 or again/hard/good/easy.")],
):
    """Record a flashcard review."""
    parsed = _parse_rating(rating)
    service = get_study_service(_config(ctx))
    try:
        result = service.record_review(card_id, parsed, now_utc())
    except MemorizerError as e:
        _fail(str(e))
    typer.secho(
        f"{result.card.word}: {parsed.name.title()} -> next in "
        f"{format_interval_label(result.scheduled_days)} ({result.card.state.value})",
        fg="green",
    )


@app.command()
def quiz(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card id.")],
    pick: Annotated[
        int | None, typer.Option(help="Answer with option number (1-based) and record it.")
    ] = None,
    rating: Annotated[
        str, typer.Option(help="Rating to record when the pick is correct.")
    ] = "3",
):
    """Multiple-choice review: list options, optionally answer one."""
    service = get_study_service(_config(ctx))
    now = now_utc()
    try:
        card = service.get_card(card_id)
        session = service.quiz_for(card_id, now)
    except MemorizerError as e:
        _fail(str(e))

    typer.echo(f"{card.word}")
    for number, option in enumerate(session.options, start=1):
        typer.echo(f"  {number}. {option.text}")

    if pick is None:
        return
    requested = _parse_rating(rating)
    if not 1 <= pick <= len(session.options):
        _fail(f"Pick must be between 1 and {len(session.options)}.")

    session.select(session.options[pick - 1].id)
    option = session.selected_option
    if option.is_correct:
        typer.secho("Correct!", fg="green")
    else:
        answer = next(o.text for o in session.options if o.is_correct)
        typer.secho(f"Wrong. Answer: {answer}", fg="yellow")

    try:
        result = service.record_quiz_review(card_id, session, requested, now)
    except MemorizerError as e:
        _fail(str(e))
    typer.echo(f"Next in {format_interval_label(result.scheduled_days)} ({result.card.state.value})")


@app.command()
def stats(ctx: typer.Context):
    """Deck statistics."""
    service = get_study_service(_config(ctx))
    try:
        deck_stats = service.stats(now_utc())
    except MemorizerError as e:
        _fail(str(e))
    typer.echo(f"Total: {deck_stats.total}")
    typer.echo(f"Due now: {deck_stats.due_now}")
    typer.echo(f"Learning: {deck_stats.learning}")
    typer.echo(f"Review: {deck_stats.review}")
    typer.echo(f"Relearning: {deck_stats.relearning}")
    if deck_stats.needs_repair:
        typer.secho(f"Needs repair: {deck_stats.needs_repair}", fg="yellow")


@app.command()
def repair(ctx: typer.Context):
    """Reset malformed card timestamps so the cards are due now."""
    service = get_study_service(_config(ctx))
    try:
        count = service.repair_schedules(now_utc())
    except MemorizerError as e:
        _fail(str(e))
    typer.secho(f"Repaired {count} card(s).", fg="green" if count else None)


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Print the resolved configuration as JSON."""
    config = _config(ctx)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    app()
