"""
Collection CLI commands.
"""

import click

from ..app import SneakerSecureApp
from ..services import ServiceErrorMessages
from .context import CLIContext, echo_json, pass_cli, run_with_app


@click.group()
def collection_commands() -> None:
    """Personal collection commands."""
    pass


@collection_commands.command("list")
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@pass_cli
def list_entries(cli_ctx: CLIContext, format: str) -> None:
    """List the collection, most recently added first."""

    async def _list(app: SneakerSecureApp) -> None:
        entries = await app.service.my_collection()
        if format == "json":
            echo_json([entry.to_dict() for entry in entries])
            return
        if not entries:
            click.echo("Your collection is empty")
            return
        for entry in entries:
            click.echo(f"{entry.added_at}  {entry.id}  {entry.name}")

    run_with_app(cli_ctx, _list)


@collection_commands.command()
@click.argument("item_id")
@pass_cli
def add(cli_ctx: CLIContext, item_id: str) -> None:
    """Claim a catalog item into the collection."""

    async def _add(app: SneakerSecureApp) -> bool:
        result = await app.service.claim(item_id)
        return result.added

    added = run_with_app(cli_ctx, _add)
    click.echo(ServiceErrorMessages.get_claim_message(added))


@collection_commands.command()
@click.argument("item_id")
@pass_cli
def remove(cli_ctx: CLIContext, item_id: str) -> None:
    """Remove an item from the collection."""

    async def _remove(app: SneakerSecureApp) -> bool:
        return await app.service.release(item_id)

    removed = run_with_app(cli_ctx, _remove)
    click.echo(ServiceErrorMessages.get_release_message(removed))


@collection_commands.command()
@click.argument("item_id")
@pass_cli
def history(cli_ctx: CLIContext, item_id: str) -> None:
    """Show the ownership history of a collected item."""

    async def _history(app: SneakerSecureApp) -> list:
        return [record.to_dict() for record in await app.service.ownership_history(item_id)]

    echo_json(run_with_app(cli_ctx, _history))
