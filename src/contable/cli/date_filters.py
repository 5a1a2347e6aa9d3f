"""CLI helpers for date range resolution."""

from datetime import date

import click

from contable.utils.date_parser import get_date_range, parse_date


def period_options(command):
    """Attach the --this-month/--last-year/... period flags to a command."""
    for flag, text in reversed(
        [
            ("--this-month", "current month"),
            ("--this-year", "current year"),
            ("--this-week", "current week"),
            ("--last-month", "previous month"),
            ("--last-year", "previous year"),
            ("--last-week", "previous week"),
        ]
    ):
        command = click.option(flag, is_flag=True, help=f"Filter to {text}")(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --this-week, --last-month, --last-year, --last-week) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    return start, end
