"""
Catalog CLI commands.
"""

import dataclasses
from pathlib import Path
from typing import Optional

import click

from ..app import SneakerSecureApp
from ..catalog import load_seed_items
from ..core.exceptions import NotFoundError
from ..services import ServiceErrorMessages
from .context import CLIContext, echo_json, pass_cli, run_with_app


@click.group()
def catalog_commands() -> None:
    """Catalog management commands."""
    pass


@catalog_commands.command("list")
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@pass_cli
def list_items(cli_ctx: CLIContext, format: str) -> None:
    """List every catalog item."""

    async def _list(app: SneakerSecureApp) -> None:
        items = sorted(await app.catalog.list_all(), key=lambda item: item.name)
        if format == "json":
            echo_json([item.to_dict() for item in items])
            return
        if not items:
            click.echo("Catalog is empty")
            return
        for item in items:
            mark = "✓" if app.registry.is_verified(item.id) else " "
            click.echo(f"[{mark}] {item.id}  {item.name}")

    run_with_app(cli_ctx, _list)


@catalog_commands.command()
@click.argument("item_id")
@pass_cli
def show(cli_ctx: CLIContext, item_id: str) -> None:
    """Show one catalog item with its ownership history."""

    async def _show(app: SneakerSecureApp) -> None:
        item = await app.catalog.get(item_id)
        if item is None:
            raise NotFoundError(item_id, component="cli")
        data = item.to_dict()
        data["verified"] = app.registry.is_verified(item.id)
        data["inCollection"] = await app.collection.contains(item.id)
        echo_json(data)

    run_with_app(cli_ctx, _show)


@catalog_commands.command()
@click.argument("item_id")
@click.option("--name", help="New display name")
@click.option("--description", help="New description")
@click.option("--image-url", help="New image URL")
@click.option("--manufacture-number", help="New manufacture number")
@pass_cli
def edit(
    cli_ctx: CLIContext,
    item_id: str,
    name: Optional[str],
    description: Optional[str],
    image_url: Optional[str],
    manufacture_number: Optional[str],
) -> None:
    """Edit a catalog item (admin only)."""

    async def _edit(app: SneakerSecureApp) -> None:
        item = await app.catalog.get(item_id)
        if item is None:
            raise NotFoundError(item_id, component="cli")

        changes = {
            "name": name,
            "description": description,
            "image_url": image_url,
            "manufacture_number": manufacture_number,
        }
        edited = dataclasses.replace(
            item, **{key: value for key, value in changes.items() if value is not None}
        )
        result = await app.service.edit_item(cli_ctx.session, edited)

        click.echo(f"✅ {ServiceErrorMessages.CATALOG_UPDATED}")
        if result.collection_updated:
            click.echo("Collection entry refreshed")
        if result.propagation_error:
            click.echo(
                f"⚠️  Collection copy not refreshed: {result.propagation_error}", err=True
            )

    run_with_app(cli_ctx, _edit)


@catalog_commands.command()
@click.argument("seed_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_cli
def seed(cli_ctx: CLIContext, seed_file: Path) -> None:
    """Load catalog items from a YAML seed file (admin only)."""

    async def _seed(app: SneakerSecureApp) -> int:
        cli_ctx.session.require_admin("seed the catalog")
        return await app.catalog.seed(load_seed_items(seed_file))

    created = run_with_app(cli_ctx, _seed)
    click.echo(f"✅ Added {created} new catalog items")


@catalog_commands.command("add-owner")
@click.argument("item_id")
@click.argument("owner_name")
@click.option("--date", help="Ownership date (ISO-8601), defaults to now")
@pass_cli
def add_owner(
    cli_ctx: CLIContext, item_id: str, owner_name: str, date: Optional[str]
) -> None:
    """Append an ownership record to an item's history (admin only)."""

    async def _add_owner(app: SneakerSecureApp) -> int:
        item = await app.service.record_ownership(
            cli_ctx.session, item_id, owner_name, date
        )
        return len(item.history)

    count = run_with_app(cli_ctx, _add_owner)
    click.echo(f"✅ Recorded owner {owner_name} ({count} owners on record)")
