"""CLI error handling helpers."""

import click

from contable.domain.errors import DomainError, TransportError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain or backend error and exit with failure.

    Backend messages are printed as received. Connection failures get a hint
    on where the backend URL comes from.
    """
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, TransportError):
        click.echo(
            "Hint: set the backend URL with --api-url or CONTABLE_API_BASE_URL.",
            err=True,
        )
    ctx.exit(1)
