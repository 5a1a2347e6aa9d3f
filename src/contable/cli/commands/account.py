"""Account management commands."""

import click

from contable.cli.error_handling import handle_domain_error
from contable.domain.account import AccountService
from contable.domain.entities import Account, AccountType

ACCOUNT_TYPES = [member.value for member in AccountType] + [
    member.label.upper() for member in AccountType
]


def _format_account(acc: Account) -> str:
    negative = "yes" if acc.allow_negative_balance else "no"
    status = "active" if acc.active else "inactive"
    return (
        f"ID: {acc.id:3d} | {acc.code:8s} | {acc.name:28s} | {acc.type.value:10s} "
        f"| negative: {negative:3s} | {status}"
    )


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default="ACTIVO",
    show_default=True,
    help="Account type",
)
@click.option(
    "--allow-negative/--no-allow-negative",
    default=False,
    help="Allow postings to drive the balance below zero",
)
@click.option("--inactive", is_flag=True, help="Create the account as inactive")
@click.pass_context
def create_account(
    ctx, code: str, name: str, account_type: str, allow_negative: bool, inactive: bool
):
    """Create a new account.

    Examples:
        contable account create 1105 "Caja general" --type ACTIVO
        contable account create 2205 "Proveedores" --type PASIVO --allow-negative
    """
    service = AccountService(ctx.obj["backend"])

    try:
        account = service.create_account(
            code=code,
            name=name,
            account_type=account_type,
            allow_negative_balance=allow_negative,
            active=not inactive,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account {account.code} '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option("--active", "active_only", is_flag=True, help="Only accounts accepting new entries")
@click.pass_context
def list_accounts(ctx, active_only: bool):
    """List accounts."""
    service = AccountService(ctx.obj["backend"])

    try:
        accounts = service.list_accounts(active_only=active_only)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 100)
    for acc in accounts:
        click.echo(_format_account(acc))


@account_group.command("show")
@click.argument("account_id", type=int)
@click.pass_context
def show_account(ctx, account_id: int):
    """Show one account."""
    service = AccountService(ctx.obj["backend"])

    try:
        acc = service.get_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Account ID: {acc.id}")
    click.echo(f"  Code: {acc.code}")
    click.echo(f"  Name: {acc.name}")
    click.echo(f"  Type: {acc.type.value} ({acc.type.label})")
    click.echo(f"  Allows negative balance: {'yes' if acc.allow_negative_balance else 'no'}")
    click.echo(f"  Status: {'active' if acc.active else 'inactive'}")


@account_group.command("update")
@click.argument("account_id", type=int)
@click.option("--code", help="New code")
@click.option("--name", help="New name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option(
    "--allow-negative/--no-allow-negative",
    default=None,
    help="Change the negative balance policy",
)
@click.pass_context
def update_account(
    ctx,
    account_id: int,
    code: str | None,
    name: str | None,
    account_type: str | None,
    allow_negative: bool | None,
):
    """Update an account. Only the provided fields change.

    Examples:
        contable account update 4 --name "Caja menor"
        contable account update 4 --no-allow-negative
    """
    service = AccountService(ctx.obj["backend"])

    try:
        account = service.update_account(
            account_id,
            code=code,
            name=name,
            account_type=account_type,
            allow_negative_balance=allow_negative,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated account {account.code} '{account.name}'")


@account_group.command("toggle-active")
@click.argument("account_id", type=int)
@click.pass_context
def toggle_active(ctx, account_id: int):
    """Activate an inactive account or deactivate an active one.

    Inactive accounts cannot receive entries in new transactions.
    """
    service = AccountService(ctx.obj["backend"])

    try:
        account = service.toggle_active(account_id)
        if account is None:
            account = service.get_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    status = "active" if account.active else "inactive"
    click.echo(f"Account {account.code} '{account.name}' is now {status}")


@account_group.command("delete")
@click.argument("account_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account_id: int, yes: bool):
    """Delete an account."""
    service = AccountService(ctx.obj["backend"])

    try:
        account = service.get_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {account.code} '{account.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted account {account.code} '{account.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
