"""
Shared state and helpers for the CLI commands.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import click

from ..app import SneakerSecureApp
from ..core.config import Config
from ..core.exceptions import SneakerSecureError
from ..services import Session, user_message

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CLIContext:
    """Configuration and identity resolved by the top-level command group."""

    config: Config
    username: str = ""

    @property
    def session(self) -> Session:
        return Session.for_username(self.username, self.config.session.admin_username)


pass_cli = click.make_pass_decorator(CLIContext)


def run_with_app(
    cli_ctx: CLIContext, operation: Callable[[SneakerSecureApp], Awaitable[T]]
) -> T:
    """Start the application, run operation against it, and shut it down.

    SneakerSecure errors are reported with their user-facing message and abort
    the command with a non-zero exit status.
    """

    async def _run() -> T:
        async with SneakerSecureApp(cli_ctx.config) as app:
            return await operation(app)

    try:
        return asyncio.run(_run())
    except SneakerSecureError as e:
        logger.debug(f"Command failed: {e}")
        click.echo(f"❌ {user_message(e)}", err=True)
        raise click.Abort()


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))
