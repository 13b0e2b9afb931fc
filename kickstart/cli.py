#!/usr/bin/env python3

import click

from kickstart import __version__
from kickstart.config import apply_logging_config, load_config
from kickstart.commands.create import create_handler
from kickstart.commands.list import list_handler
from kickstart.commands.config import config_cmd


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output.")
def cli(verbose):
    """Scaffold new projects from template repositories."""
    apply_logging_config(load_config(), verbose=verbose)


cli.add_command(create_handler, name='create')
cli.add_command(list_handler, name='list')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
