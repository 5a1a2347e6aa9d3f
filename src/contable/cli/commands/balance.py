"""Account balance commands."""

import click

from contable.cli.error_handling import handle_domain_error
from contable.domain.balance import BalanceService
from contable.domain.balances import total_balance
from contable.domain.entities import AccountType, BalanceRecord

TYPE_CHOICES = [member.value for member in AccountType]


def _money(value) -> str:
    return f"${value:,.2f}"


def _format_record(record: BalanceRecord) -> str:
    status = "valid" if record.valid else "invalid"
    negative = "yes" if record.allow_negative_balance else "no"
    return (
        f"{record.code:<8} {record.name[:25]:<25} {record.type.upper():<11} {status:<8} "
        f"{_money(record.total_debits):>14} {_money(record.total_credits):>14} "
        f"{_money(record.balance):>14}  {negative}"
    )


@click.group()
def balance_group():
    """Review account balances computed by the backend."""
    pass


@balance_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    help="Only accounts of this type",
)
@click.pass_context
def list_balances(ctx, account_type: str | None):
    """List the balance of every account."""
    service = BalanceService(ctx.obj["backend"])

    try:
        records = service.list_balances(account_type)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not records:
        click.echo("No balances found.")
        return

    click.echo(
        f"\n{'Code':<8} {'Account':<25} {'Type':<11} {'Status':<8} "
        f"{'Debits':>14} {'Credits':>14} {'Balance':>14}  Neg."
    )
    click.echo("-" * 105)
    for record in records:
        click.echo(_format_record(record))
    click.echo("-" * 105)
    click.echo(f"{'TOTAL':<8} {_money(total_balance(records)):>95}")


@balance_group.command("show")
@click.argument("account_id", type=int)
@click.pass_context
def show_balance(ctx, account_id: int):
    """Show the balance of one account."""
    service = BalanceService(ctx.obj["backend"])

    try:
        record = service.get_account_balance(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Account {record.code} '{record.name}' ({record.type.upper()})")
    click.echo(f"  Total debits: {_money(record.total_debits)}")
    click.echo(f"  Total credits: {_money(record.total_credits)}")
    click.echo(f"  Balance: {_money(record.balance)}")
    click.echo(f"  Allows negative balance: {'yes' if record.allow_negative_balance else 'no'}")


@balance_group.command("summary")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    help="Only accounts of this type",
)
@click.pass_context
def balance_summary(ctx, account_type: str | None):
    """Show totals by account type and how many balances are positive, negative or zero."""
    service = BalanceService(ctx.obj["backend"])

    try:
        summary = service.get_summary(account_type)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("\nBalance by account type:")
    click.echo("-" * 40)
    for kind, subtotal in summary.subtotals_by_type.items():
        click.echo(f"{kind.value:<20} {_money(subtotal):>19}")
    click.echo("-" * 40)
    click.echo(f"{'TOTAL':<20} {_money(summary.total):>19}")
    click.echo(
        f"\nAccounts: {summary.count} | Positive: {summary.positive} | "
        f"Negative: {summary.negative} | Zero: {summary.zero}"
    )


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(balance_group, name="balance")
