"""EdgeDoc CLI - edgedoc command."""

import click

from edgedoc import __version__
from edgedoc.cli.graph import graph_group
from edgedoc.cli.terms import terms_group
from edgedoc.cli.validate import validate_group
from edgedoc.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="edgedoc")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """EdgeDoc - cross-reference graph between documentation and code."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    set_run_id()
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(graph_group, name="graph")
cli.add_command(validate_group, name="validate")
cli.add_command(terms_group, name="terms")


if __name__ == "__main__":
    cli()
