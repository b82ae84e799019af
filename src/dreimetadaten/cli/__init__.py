# ABOUTME: CLI package for dreimetadaten, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from dreimetadaten.cli.commands import (
    check_cmd,
    export_cmd,
    import_cmd,
    ls_cmd,
    webbuild_cmd,
)


@click.group()
@click.version_option(package_name="dreimetadaten")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """dreimetadaten - ordered metadata catalog for audio-play collections."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(check_cmd.check)
cli.add_command(export_cmd.export)
cli.add_command(import_cmd.import_catalog)
cli.add_command(ls_cmd.ls)
cli.add_command(webbuild_cmd.webbuild)
