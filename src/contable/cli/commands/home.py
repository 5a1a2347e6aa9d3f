"""Home screen and connectivity commands."""

import click

from contable.cli.error_handling import handle_domain_error
from contable.domain.dashboard import DashboardService


@click.command("home")
@click.pass_context
def home(ctx):
    """Show how many parties, accounts and transactions exist and the total balance."""
    service = DashboardService(ctx.obj["backend"])

    try:
        stats = service.get_stats()
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("\nAccounting overview:")
    click.echo("-" * 40)
    click.echo(f"{'Parties':<20} {stats.parties:>19}")
    click.echo(f"{'Accounts':<20} {stats.accounts:>19}")
    click.echo(f"{'Transactions':<20} {stats.transactions:>19}")
    click.echo(f"{'Total balance':<20} {f'${stats.total_balance:,.2f}':>19}")


@click.command("ping")
@click.pass_context
def ping(ctx):
    """Check that the backend is reachable."""
    backend = ctx.obj["backend"]
    try:
        backend.ping()
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Backend at {backend.base_url} is reachable")


def register_commands(cli):
    """Register home commands with main CLI."""
    cli.add_command(home)
    cli.add_command(ping)
