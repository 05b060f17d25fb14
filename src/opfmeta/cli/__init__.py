# ABOUTME: CLI package for opfmeta, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from opfmeta.cli.commands import inspect_cmd, items_cmd


@click.group()
@click.version_option(package_name="opfmeta")
@click.option("-v", "--verbose", is_flag=True, help="Log skipped declarations and other details.")
def cli(verbose: bool) -> None:
    """opfmeta - inspect the metadata of EPUB package documents."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(inspect_cmd.inspect)
cli.add_command(items_cmd.items)
