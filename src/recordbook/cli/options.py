# ABOUTME: Shared Click options for recordbook CLI commands.
# ABOUTME: Connection settings (--dsn, --user, --password) with environment fallbacks.

from collections.abc import Callable
from typing import Any

import click

from recordbook.db.connection import DEFAULT_DSN

dsn_option = click.option(
    "--dsn",
    "dsn",
    envvar="RECORDBOOK_DSN",
    default=None,
    help=f"Data source name of the record database (default: {DEFAULT_DSN})",
)

user_option = click.option(
    "--user",
    "user",
    envvar="RECORDBOOK_USER",
    default=None,
    help="Database username, for drivers that authenticate.",
)

password_option = click.option(
    "--password",
    "password",
    envvar="RECORDBOOK_PASSWORD",
    default=None,
    help="Database password, for drivers that authenticate.",
)


def store_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply all connection options to a command."""
    return dsn_option(user_option(password_option(func)))
