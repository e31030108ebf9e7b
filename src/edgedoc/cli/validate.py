"""edgedoc validate commands."""

from pathlib import Path

import click

from edgedoc.cli.utils import engine_errors, finish, load_project
from edgedoc.core.progress import spinner
from edgedoc.validate.checks import (
    validate_all,
    validate_index,
    validate_interfaces,
    validate_orphan_files,
    validate_spec_orphans,
    validate_terms,
)

_path_argument = click.argument(
    "path", default=".", type=click.Path(exists=True, path_type=Path)
)
_json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")


@click.group()
def validate_group() -> None:
    """Validate terms, code coverage and reference links.

    Exits 1 when any check reports an error.
    """


@validate_group.command("terms")
@_path_argument
@_json_option
def terms_command(path: Path, as_json: bool) -> None:
    """Check term definitions and [[references]]."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors():
        report = validate_terms(root, config)
    finish([report], as_json=as_json)


@validate_group.command("spec-orphans")
@_path_argument
@_json_option
def spec_orphans_command(path: Path, as_json: bool) -> None:
    """Find exported code that no document reaches."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors(), spinner("Scanning sources", enabled=not as_json):
        report = validate_spec_orphans(root, config)
    finish([report], as_json=as_json)


@validate_group.command("orphans")
@_path_argument
@_json_option
def orphans_command(path: Path, as_json: bool) -> None:
    """Find source files that no document names and no file imports."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors(), spinner("Scanning sources", enabled=not as_json):
        report = validate_orphan_files(root, config)
    finish([report], as_json=as_json)


@validate_group.command("interfaces")
@_path_argument
@click.option("--feature", help="Only check links of this feature")
@click.option("--namespace", help="Only check interfaces under this namespace")
@_json_option
def interfaces_command(
    path: Path, feature: str | None, namespace: str | None, as_json: bool
) -> None:
    """Check interface provides/uses links and sibling coverage."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors():
        report = validate_interfaces(root, config, feature=feature, namespace=namespace)
    finish([report], as_json=as_json)


@validate_group.command("index")
@_path_argument
@_json_option
def index_command(path: Path, as_json: bool) -> None:
    """Check that every link in the saved index has its reverse."""
    root, config = load_project(path, as_json=as_json)
    with engine_errors():
        report = validate_index(root, config)
    finish([report], as_json=as_json)


@validate_group.command("all")
@_path_argument
@_json_option
def all_command(path: Path, as_json: bool) -> None:
    """Run the terms, spec-orphans, interfaces and index checks.

    The last two need a snapshot and are skipped without one.
    """
    root, config = load_project(path, as_json=as_json)
    with engine_errors(), spinner("Validating", enabled=not as_json):
        reports = validate_all(root, config)
    finish(reports, as_json=as_json)
