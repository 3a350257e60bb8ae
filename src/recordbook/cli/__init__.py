# ABOUTME: CLI package for recordbook, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from recordbook.cli.commands import (
    add_cmd,
    export_cmd,
    ls_cmd,
    menu_cmd,
    rm_cmd,
    show_cmd,
    sort_cmd,
    update_cmd,
)


@click.group()
@click.version_option(package_name="recordbook")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log every statement issued.")
def cli(verbose: bool) -> None:
    """recordbook - manage book records in a relational database."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(add_cmd.add)
cli.add_command(ls_cmd.ls)
cli.add_command(show_cmd.show)
cli.add_command(rm_cmd.rm)
cli.add_command(update_cmd.update)
cli.add_command(sort_cmd.sort)
cli.add_command(export_cmd.export)
cli.add_command(menu_cmd.menu)
