"""
Command-line interface for typstable.

Provides the CLI command group and registers individual subcommands.
"""

from __future__ import annotations

import logging

import click

from .. import __version__
from .edit import edit_group
from .inspect_command import inspect_table
from .render import render
from .tables import from_tsv, new_table, normalize


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log model operations to stderr.")
def main(verbose: bool):
    """typstable - Build table models and render them as Typst markup."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register CLI subcommands
main.add_command(new_table)
main.add_command(normalize)
main.add_command(from_tsv)
main.add_command(render)
main.add_command(inspect_table)
main.add_command(edit_group)


if __name__ == "__main__":
    main()
