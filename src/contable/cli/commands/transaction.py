"""Transaction management commands."""

from dataclasses import replace

import click

from contable.cli.date_filters import period_options, resolve_cli_date_range
from contable.cli.error_handling import handle_domain_error
from contable.domain.entities import TransactionDraft, TransactionFilter
from contable.domain.errors import NotFoundError
from contable.domain.transaction import TransactionService
from contable.domain.validation import draft_totals
from contable.utils.account_resolver import resolve_account
from contable.utils.date_parser import date_only, parse_date
from contable.utils.entry_parser import parse_entry


@click.group()
def transaction_group():
    """Manage double-entry transactions."""
    pass


@transaction_group.command("create")
@click.option("--party", "party_id", required=True, type=int, help="Party ID")
@click.option(
    "--date",
    "txn_date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--entry",
    "entries",
    multiple=True,
    help="Entry as ACCOUNT:ROLE:AMOUNT, ACCOUNT being an account ID or code (repeatable)",
)
@click.pass_context
def create_transaction(
    ctx, party_id: int, txn_date: str, description: str, entries: tuple[str, ...]
):
    """Create a transaction after checking that debits equal credits.

    Examples:
        contable transaction create --party 1 --description "Pago" \\
            --entry 1105:DEBITO:100 --entry 4135:CREDITO:100
    """
    service = TransactionService(ctx.obj["backend"])

    try:
        when = parse_date(txn_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        lines = [parse_entry(spec) for spec in entries]
    except ValueError as e:
        handle_domain_error(ctx, e)

    reference = service.load_reference_data()
    for label, result in (("parties", reference.parties), ("accounts", reference.accounts)):
        if not result.ok:
            click.echo(f"Warning: could not load {label}: {result.error}", err=True)
    accounts = reference.accounts.items
    parties = reference.parties.items

    # Entries may name accounts by code; unresolved references are left for
    # validation to report
    resolved = []
    for line in lines:
        try:
            resolved.append(replace(line, account_id=resolve_account(accounts, line.account_id)))
        except NotFoundError:
            resolved.append(line)

    draft = TransactionDraft(
        party_id=party_id,
        date=when,
        description=description,
        entries=tuple(resolved),
    )

    try:
        txn = service.create_transaction(draft, accounts=accounts, parties=parties)
    except ValueError as e:
        handle_domain_error(ctx, e)

    debits, credits = draft_totals(draft)
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {date_only(txn.date)}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Debits: ${debits:,.2f} | Credits: ${credits:,.2f}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--party", "party_id", type=int, help="Party ID")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    this_week: bool,
    last_month: bool,
    last_year: bool,
    last_week: bool,
    party_id: int | None,
):
    """List transactions with optional date and party filters.

    Giving the same --start-date and --end-date lists that single day.
    """
    service = TransactionService(ctx.obj["backend"])

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "this-week": this_week,
            "last-month": last_month,
            "last-year": last_year,
            "last-week": last_week,
        },
    )

    try:
        transactions = service.list_transactions(
            TransactionFilter(date_from=start, date_to=end, party_id=party_id)
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Party':<25} {'Description':<35} {'Total':>15}")
    click.echo("-" * 100)

    for txn in transactions:
        party_name = txn.party_name or (str(txn.party_id) if txn.party_id is not None else "N/A")
        total_str = f"${txn.total_debits:,.2f}"
        click.echo(
            f"{txn.id:<6} {date_only(txn.date):<12} {party_name[:25]:<25} "
            f"{txn.description[:35]:<35} {total_str:>15}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a transaction with its entries."""
    service = TransactionService(ctx.obj["backend"])

    try:
        txn = service.get_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {date_only(txn.date)}")
    click.echo(f"  Party: {txn.party_name or txn.party_id}")
    click.echo(f"  Description: {txn.description}")
    click.echo("  Entries:")
    for entry in txn.entries:
        click.echo(f"    {entry.role.value:<8} account {entry.account_id:<8} ${entry.amount:,.2f}")
    click.echo(f"  Debits: ${txn.total_debits:,.2f} | Credits: ${txn.total_credits:,.2f}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["backend"])

    try:
        service.get_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
