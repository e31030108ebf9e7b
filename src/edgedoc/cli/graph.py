"""edgedoc graph commands - build and query the reference index."""

from pathlib import Path

import click

from edgedoc.cli.utils import echo_json, engine_errors, load_project
from edgedoc.config.loader import get_index_path
from edgedoc.core.formatting import format_elapsed, pluralize, summarize
from edgedoc.core.progress import status, task
from edgedoc.index.builder import ReferenceIndexBuilder
from edgedoc.index.query import code_references, feature_details, overview, term_usage
from edgedoc.index.store import load_index


@click.group()
def graph_group() -> None:
    """Build and query the bidirectional reference index."""


@graph_group.command("build")
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--no-symbols", is_flag=True, help="Omit per-file export lists")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Snapshot path (default: .edgedoc/references.json)",
)
@click.option("--json", "as_json", is_flag=True, help="Output build stats as JSON")
def build_command(path: Path, no_symbols: bool, output: Path | None, as_json: bool) -> None:
    """Scan docs and sources and write the reference index.

    PATH is the project root (default: current directory).
    """
    root, config = load_project(path, as_json=as_json)
    builder = ReferenceIndexBuilder(root, config)
    include_symbols = False if no_symbols else None

    with engine_errors(), task("Building reference index", enabled=not as_json):
        result = builder.build_and_save(output, include_symbols=include_symbols)

    stats = result.stats
    if as_json:
        echo_json({"output": str(result.output_path), **vars(stats)})
        return

    status(
        f"{pluralize(stats.features, 'feature')}, "
        f"{pluralize(stats.code_files, 'code file')}, "
        f"{pluralize(stats.interfaces, 'interface')}, "
        f"{pluralize(stats.terms, 'term')}",
        indent=2,
    )
    status(
        f"{pluralize(stats.import_edges, 'import edge')}, "
        f"{pluralize(stats.external_imports, 'external import')}",
        indent=2,
    )
    if result.scan.failures:
        failed = [f.path for f in result.scan.failures]
        status(
            f"{pluralize(len(failed), 'file')} failed extraction: {summarize(failed)}",
            style="warning",
            indent=2,
        )
    status(
        f"Wrote {result.output_path} in {format_elapsed(stats.elapsed_ms)}",
        style="success",
    )


def _echo_list(label: str, values: list[str]) -> None:
    if values:
        click.echo(f"  {label}: {', '.join(values)}")


@graph_group.command("query")
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("--feature", "feature_id", help="Show one feature's links")
@click.option("--code", "code_path", help="Show one code file's links")
@click.option("--term", "term_name", help="Show one term's definition and usages")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def query_command(
    path: Path,
    feature_id: str | None,
    code_path: str | None,
    term_name: str | None,
    as_json: bool,
) -> None:
    """Query the saved reference index.

    Without a selector, prints an overview of the snapshot.
    """
    selected = [s for s in (feature_id, code_path, term_name) if s is not None]
    if len(selected) > 1:
        raise click.UsageError("Use at most one of --feature, --code and --term")

    root, config = load_project(path, as_json=as_json)
    with engine_errors():
        index = load_index(get_index_path(root, config))

        if feature_id is not None:
            feature = feature_details(index, feature_id)
            if as_json:
                echo_json({"id": feature_id, **feature.model_dump()})
                return
            click.echo(click.style(f"Feature: {feature_id}", bold=True) + f" ({feature.file})")
            if feature.entry_point:
                click.echo(f"  entry point: {feature.entry_point}")
            _echo_list("code", feature.code.uses)
            _echo_list("used by", feature.code.used_by)
            _echo_list("depends on", feature.features.depends_on)
            _echo_list("depended on by", feature.features.used_by)
            _echo_list("related", feature.features.related)
            _echo_list("provides", feature.interfaces.provides)
            _echo_list("uses", feature.interfaces.uses)
            _echo_list("defines terms", feature.terms.defines)
            _echo_list("uses terms", feature.terms.uses)
            _echo_list("tested by", feature.tests.tested_by)
            return

        if code_path is not None:
            refs = code_references(index, code_path)
            if as_json:
                echo_json(refs.to_dict())
                return
            entry = refs.entry
            suffix = "" if entry.exists else click.style(" (missing)", fg="red")
            click.echo(click.style(f"Code: {refs.path}", bold=True) + suffix)
            _echo_list("features", refs.features)
            _echo_list("documented in", entry.documented_in)
            _echo_list("imports", entry.imports)
            _echo_list("imported by", entry.imported_by)
            _echo_list("external", entry.external_imports)
            _echo_list("exports", [e.name for e in entry.exports])
            return

        if term_name is not None:
            term = term_usage(index, term_name)
            if as_json:
                echo_json(term.model_dump())
                return
            definition = term.definition
            click.echo(
                click.style(f"Term: {term_name}", bold=True)
                + f" ({definition.scope}, {definition.file}:{definition.line})"
            )
            if definition.definition:
                click.echo(f"  {definition.definition}")
            click.echo(f"  {pluralize(term.usage_count, 'reference')}")
            for ref in term.references:
                click.echo(f"    {ref.file}:{ref.line}  {ref.context}")
            return

        summary = overview(index)
    if as_json:
        echo_json(summary)
        return
    for key, value in summary.items():
        click.echo(f"{key:>16}: {value}")
