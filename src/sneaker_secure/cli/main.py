"""
Main CLI entry point for SneakerSecure.

Provides the ``sneaker-secure`` command with subcommands for migration,
verification, scanning, catalog and collection management, and debugging.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..app import SneakerSecureApp
from ..core.config import Config
from ..core.exceptions import SneakerSecureError
from ..services import ServiceErrorMessages, user_message
from ..verification import VerificationRegistry
from .catalog import catalog_commands
from .collection import collection_commands
from .context import CLIContext, echo_json, pass_cli, run_with_app
from .debug import DEBUG_COMMANDS

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a YAML configuration file",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the key-value store",
)
@click.option(
    "--user",
    "username",
    envvar="SNKR_USER",
    default="",
    help="Username for this session (admin rights for the configured admin user)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    data_dir: Optional[Path],
    username: str,
    verbose: bool,
    debug: bool,
) -> None:
    """
    SneakerSecure CLI

    Verify scanned sneakers against the trusted registry and manage the local
    catalog and personal collection.
    """
    try:
        config = Config.load(config_path)
    except SneakerSecureError as e:
        click.echo(f"❌ {user_message(e)}", err=True)
        raise click.Abort()

    if data_dir is not None:
        config.data_dir = data_dir

    # Set logging level
    if debug:
        config.debug = True
        config.logging.level = "DEBUG"
    elif verbose:
        config.logging.level = "INFO"
    else:
        config.logging.level = "WARNING"

    ctx.obj = CLIContext(config=config, username=username)


cli.add_command(catalog_commands, name="catalog")
cli.add_command(collection_commands, name="collection")


@cli.command()
@pass_cli
def migrate(cli_ctx: CLIContext) -> None:
    """Run the one-time legacy collection migration."""

    async def _migrate(app: SneakerSecureApp) -> dict:
        report = app.migration_report
        if report is None:
            report = await app.migration.migrate_store(app.config.migration.legacy_keys)
        return report.to_dict()

    report = run_with_app(cli_ctx, _migrate)
    if report["already_completed"]:
        click.echo("Migration already completed")
        return

    if report["postponed"]:
        click.echo("❌ Legacy collection unreadable, migration postponed", err=True)
        for key, reason in report["unreadable_keys"].items():
            click.echo(f"  {key}: {reason}", err=True)
        raise click.Abort()

    click.echo(
        f"✅ Migrated {report['migrated']} entries, skipped {len(report['skipped'])}"
    )
    for skipped in report["skipped"]:
        click.echo(f"  ⚠️  record #{skipped['index']}: {skipped['reason']}")
    for key, reason in report["unreadable_keys"].items():
        click.echo(f"  ⚠️  key '{key}' not migrated: {reason}")


@cli.command()
@click.argument("item_id")
@pass_cli
def verify(cli_ctx: CLIContext, item_id: str) -> None:
    """Check an identifier against the trusted registry."""
    try:
        registry = VerificationRegistry.from_config(cli_ctx.config.verification)
    except SneakerSecureError as e:
        click.echo(f"❌ {user_message(e)}", err=True)
        raise click.Abort()

    if registry.is_verified(item_id):
        click.echo(f"✅ Verified: {item_id}")
    else:
        click.echo(f"⚠️  Unverified: {item_id}")


@cli.command()
@click.argument("payload")
@click.option("--claim", is_flag=True, help="Add the scanned item to the collection")
@pass_cli
def scan(cli_ctx: CLIContext, payload: str, claim: bool) -> None:
    """Process a scanned payload (JSON object, or '-' to read stdin)."""
    if payload == "-":
        payload = sys.stdin.read()

    async def _scan(app: SneakerSecureApp) -> dict:
        result = await app.service.scan(payload)
        output = {
            "item": result.item.to_dict(),
            "verified": result.verified,
            "inCollection": result.in_collection,
        }
        if claim:
            claimed = await app.service.claim(result.item.id)
            output["inCollection"] = True
            output["message"] = ServiceErrorMessages.get_claim_message(claimed.added)
        return output

    echo_json(run_with_app(cli_ctx, _scan))


@cli.group()
def debug() -> None:
    """Debug commands over the local store."""
    pass


@debug.command("list")
def list_debug_commands() -> None:
    """List available debug commands."""
    for command in DEBUG_COMMANDS.values():
        click.echo(f"{command.name:<20} {command.label}")


@debug.command("run")
@click.argument("name", type=click.Choice(sorted(DEBUG_COMMANDS)))
@pass_cli
def run_debug_command(cli_ctx: CLIContext, name: str) -> None:
    """Run a debug command by name."""
    command = DEBUG_COMMANDS[name]

    async def _run(app: SneakerSecureApp) -> object:
        return await command.action(app, cli_ctx.session)

    click.echo(f"{command.label}:")
    echo_json(run_with_app(cli_ctx, _run))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
