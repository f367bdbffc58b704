"""tsmatchup CLI."""

import click

from tsmatchup import __version__
from tsmatchup.cli.locate import locate_command
from tsmatchup.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="tsmatchup")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tsmatchup - jump between matching delimiters using tree-sitter."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(locate_command, name="locate")


if __name__ == "__main__":
    cli()
