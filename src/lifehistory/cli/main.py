"""
Life History CLI - Click-based command line interface.

Usage:
    lifehistory build 2000-06-15                 # Full structure as JSON
    lifehistory build 2000-06-15 --summary       # Counts and boundary months
    lifehistory move life.json EVENT_ID 2000-06 2000-07 -o moved.json
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import IO

import click

from lifehistory.builder import initiate
from lifehistory.core.config import Config
from lifehistory.core.exceptions import ConfigurationError
from lifehistory.models import LifeHistoryDecade, iter_months, life_history_from_list, life_history_to_list
from lifehistory.mover import move_event

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def write_json(life_history: Sequence[LifeHistoryDecade], output: IO[str]) -> None:
    json.dump(life_history_to_list(life_history), output, ensure_ascii=False, indent=2)
    output.write("\n")


def summarize(life_history: Sequence[LifeHistoryDecade]) -> str:
    """Human readable counts and boundary months."""
    locations = list(iter_months(life_history))
    if not locations:
        return "Empty life history"

    years = sum(len(decade.years) for decade in life_history)
    events = sum(len(location.month.events) for location in locations)
    lines = [
        f"Decades: {len(life_history)}",
        f"Years: {years}",
        f"Months: {len(locations)}",
        f"Events: {events}",
        f"First month: {locations[0].month.id}",
        f"Last month: {locations[-1].month.id}",
    ]
    return "\n".join(lines)


@click.group(invoke_without_command=True)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML configuration file",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Life History calendar tools

    Build a lifetime calendar from a birth date, or move an event
    between months of a saved calendar:

        lifehistory build 1990-03-02
        lifehistory move life.json EVENT_ID 1990-03 1991-01
    """
    try:
        config = Config(config_path)
        level = logging.DEBUG if verbose else config.log_level
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(level=level, format=LOG_FORMAT)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("birth_date")
@click.option(
    "-o",
    "--output",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Write JSON here instead of stdout",
)
@click.option("--summary", is_flag=True, help="Print counts instead of JSON")
@click.pass_obj
def build(config: Config, birth_date: str, output: IO[str], summary: bool) -> None:
    """Build the calendar for BIRTH_DATE."""
    try:
        max_age = config.max_age
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    try:
        life_history = initiate(birth_date, max_age=max_age, user_id=config.placeholder_user_id)
    except (ValueError, OverflowError) as e:
        raise click.BadParameter(f"cannot parse {birth_date!r}", param_hint="BIRTH_DATE") from e

    if summary:
        click.echo(summarize(life_history))
    else:
        write_json(life_history, output)


@cli.command()
@click.argument("source_file", type=click.File("r", encoding="utf-8"))
@click.argument("event_id")
@click.argument("source_month")
@click.argument("target_month")
@click.option(
    "-o",
    "--output",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Write JSON here instead of stdout",
)
def move(
    source_file: IO[str],
    event_id: str,
    source_month: str,
    target_month: str,
    output: IO[str],
) -> None:
    """Move EVENT_ID from SOURCE_MONTH to TARGET_MONTH (both YYYY-MM).

    SOURCE_FILE is a calendar previously written by `build`; use - for stdin.
    Exits with status 1 when nothing was moved.
    """
    try:
        life_history = life_history_from_list(json.load(source_file))
    except (KeyError, TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid life history JSON: {e}") from e

    result = move_event(
        event=event_id,
        life_history=life_history,
        source_month=source_month,
        target_month=target_month,
    )
    if not result.moved:
        raise click.ClickException(f"Nothing moved: {result.reason}")

    write_json(result.life_history, output)


if __name__ == "__main__":
    cli()
