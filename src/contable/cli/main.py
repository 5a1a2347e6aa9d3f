"""Main CLI entry point."""

import logging

import click

from contable.backend.factories import DEFAULT_API_BASE_URL, create_http_backend

# Import and register all commands at module level
from contable.cli.commands import (
    account,
    balance,
    home,
    party,
    transaction,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send log records at or above ``level`` to stderr."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)


@click.group()
@click.option(
    "--api-url",
    help=f"Backend base URL (overrides CONTABLE_API_BASE_URL, default {DEFAULT_API_BASE_URL})",
    envvar="CONTABLE_API_BASE_URL",
)
@click.option(
    "--timeout",
    type=float,
    help="Request timeout in seconds (overrides CONTABLE_API_TIMEOUT)",
    envvar="CONTABLE_API_TIMEOUT",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
    envvar="CONTABLE_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, api_url: str | None, timeout: float | None, log_level: str):
    """Contable - accounting backend console.

    Manage parties, the chart of accounts and double-entry transactions, and
    review account balances computed by the backend.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Only connect when actually running a command (not when showing help);
    # a backend already placed in ctx.obj is reused
    if ctx.invoked_subcommand is not None and "backend" not in ctx.obj:
        backend = create_http_backend(base_url=api_url, timeout=timeout)
        ctx.obj["backend"] = backend
        ctx.call_on_close(backend.close)


# Register all commands
home.register_commands(cli)
party.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
balance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
