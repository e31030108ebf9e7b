"""edgedoc terms commands - list and search the glossary."""

from pathlib import Path

import click

from edgedoc.cli.utils import echo_json, engine_errors, load_project
from edgedoc.core.formatting import pluralize, truncate_at_word
from edgedoc.terms.loader import load_term_registry
from edgedoc.terms.models import TermDefinition, TermScope
from edgedoc.terms.registry import TermRegistry


def _as_dict(registry: TermRegistry, definition: TermDefinition) -> dict[str, object]:
    return {
        "name": definition.name,
        "scope": definition.scope.value,
        "kind": definition.kind.value,
        "file": definition.file,
        "line": definition.line,
        "definition": definition.definition,
        "aliases": list(definition.aliases),
        "usage_count": registry.usage_count(definition.name),
    }


def _echo_definitions(registry: TermRegistry, definitions: list[TermDefinition]) -> None:
    for d in definitions:
        uses = pluralize(registry.usage_count(d.name), "use")
        click.echo(f"{click.style(d.name, bold=True)} [{d.scope.value}] {d.location} ({uses})")
        if d.definition:
            click.echo(f"    {truncate_at_word(d.definition, 72)}")


@click.group()
def terms_group() -> None:
    """List and search term definitions."""


@terms_group.command("list")
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--scope",
    type=click.Choice([s.value for s in TermScope]),
    help="Only list terms with this scope",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_command(path: Path, scope: str | None, as_json: bool) -> None:
    """List every defined term."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors():
        registry = load_term_registry(root, config)

    definitions = registry.definitions()
    if scope is not None:
        definitions = [d for d in definitions if d.scope.value == scope]
    definitions.sort(key=lambda d: (d.name.lower(), d.file))

    if as_json:
        echo_json([_as_dict(registry, d) for d in definitions])
        return
    _echo_definitions(registry, definitions)
    click.echo(pluralize(len(definitions), "term"))


@terms_group.command("find")
@click.argument("query")
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def find_command(query: str, path: Path, as_json: bool) -> None:
    """Search terms by name, alias and definition text."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors():
        registry = load_term_registry(root, config)

    matches = registry.search(query)
    if as_json:
        echo_json([_as_dict(registry, d) for d in matches])
        return
    if not matches:
        click.echo(f"No terms match '{query}'")
        return
    _echo_definitions(registry, matches)
