"""Party management commands."""

import click

from contable.cli.error_handling import handle_domain_error
from contable.domain.entities import DocumentType
from contable.domain.party import PartyService

DOCUMENT_TYPES = [member.value for member in DocumentType]


@click.group()
def party_group():
    """Manage parties (customers and suppliers)."""
    pass


@party_group.command("create")
@click.argument("name", metavar="NAME")
@click.option(
    "--document-type",
    type=click.Choice(DOCUMENT_TYPES, case_sensitive=False),
    default="CC",
    show_default=True,
    help="Document type",
)
@click.option("--document-number", required=True, help="Document number")
@click.pass_context
def create_party(ctx, name: str, document_type: str, document_number: str):
    """Create a new party.

    Examples:
        contable party create "Acme S.A.S." --document-type NIT --document-number 900123456
        contable party create "Ana Perez" --document-number 52123456
    """
    service = PartyService(ctx.obj["backend"])

    try:
        party = service.create_party(name, document_type, document_number)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created party '{party.name}' (ID: {party.id})")


@party_group.command("list")
@click.pass_context
def list_parties(ctx):
    """List all parties."""
    service = PartyService(ctx.obj["backend"])

    try:
        parties = service.list_parties()
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not parties:
        click.echo("No parties found.")
        return

    click.echo("\nParties:")
    click.echo("-" * 70)
    for party in parties:
        click.echo(
            f"ID: {party.id:3d} | {party.name:30s} | {party.document_type:4s} {party.document_number}"
        )


@party_group.command("show")
@click.argument("party_id", type=int)
@click.pass_context
def show_party(ctx, party_id: int):
    """Show one party."""
    service = PartyService(ctx.obj["backend"])

    try:
        party = service.get_party(party_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        document_label = DocumentType.parse(party.document_type).label
    except ValueError:
        document_label = party.document_type

    click.echo(f"Party ID: {party.id}")
    click.echo(f"  Name: {party.name}")
    click.echo(f"  Document: {document_label} {party.document_number}")


@party_group.command("update")
@click.argument("party_id", type=int)
@click.option("--name", help="New name")
@click.option(
    "--document-type",
    type=click.Choice(DOCUMENT_TYPES, case_sensitive=False),
    help="New document type",
)
@click.option("--document-number", help="New document number")
@click.pass_context
def update_party(
    ctx,
    party_id: int,
    name: str | None,
    document_type: str | None,
    document_number: str | None,
):
    """Update a party. Only the provided fields change.

    Examples:
        contable party update 3 --name "Acme Colombia S.A.S."
    """
    service = PartyService(ctx.obj["backend"])

    try:
        current = service.get_party(party_id)
        party = service.update_party(
            party_id,
            name if name is not None else current.name,
            document_type if document_type is not None else current.document_type,
            document_number if document_number is not None else current.document_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated party '{party.name}' (ID: {party.id})")


@party_group.command("delete")
@click.argument("party_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_party(ctx, party_id: int, yes: bool):
    """Delete a party.

    The backend refuses to delete parties that transactions refer to.
    """
    service = PartyService(ctx.obj["backend"])

    try:
        party = service.get_party(party_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete party '{party.name}' (ID: {party_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_party(party_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted party '{party.name}'")


def register_commands(cli):
    """Register party commands with main CLI."""
    cli.add_command(party_group, name="party")
