"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from fields_resolver.configuration import (
    CACHE_DIR_ENV_VAR,
    DEFAULT_MANIFEST_FILENAME,
    ConfigurationError,
    default_fields_cache_dir,
    load_build_manifest,
    write_placeholder_build_manifest,
)
from fields_resolver.dependency_resolution import (
    DependencyManager,
    FieldImportError,
    create_field_dependency_manager,
    inject_fields,
)
from fields_resolver.package_building import BuildRequest, FieldsBuildError, build_package_fields
from fields_resolver.schema_management import (
    SchemaError,
    SchemaLoader,
    dump_field_nodes,
    load_fields_file,
)


class CliError(Exception):
    """Custom CLI error."""


def _cache_dir_option(command):
    return click.option(
        "--cache-dir",
        "cache_dir",
        required=False,
        envvar=CACHE_DIR_ENV_VAR,
        type=click.Path(path_type=str, file_okay=False),
        help=f"Directory for cached external schemas (default: {default_fields_cache_dir()})",
    )(command)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="fields-resolver")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Resolve external field definitions of packages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-manifest")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_MANIFEST_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the build manifest template to write",
)
def generate_manifest(output_path: str) -> None:
    """Generate a placeholder build manifest declaring the ECS dependency."""
    try:
        resolved_output = write_placeholder_build_manifest(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="inject")
@click.option(
    "--fields",
    "fields_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the fields file to resolve",
)
@click.option(
    "--manifest",
    "manifest_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the build manifest declaring dependencies",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to write the resolved fields to (default: standard output)",
)
@_cache_dir_option
def inject(
    fields_path: str, manifest_path: str | None, output_path: str | None, cache_dir: str | None
) -> None:
    """Replace external field references in one fields file."""
    try:
        manager = _load_dependency_manager(manifest_path, _schema_loader(cache_dir))
        result = inject_fields(manager, load_fields_file(fields_path))
        rendered = dump_field_nodes(result.fields)
        if output_path is None:
            click.echo(rendered, nl=False)
            return
        Path(output_path).write_text(rendered, encoding="utf-8")
    except (ConfigurationError, SchemaError, FieldImportError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(Path(output_path).resolve()))


@cli.command(name="build")
@click.option(
    "--package-root",
    "package_root",
    required=True,
    type=click.Path(path_type=str, file_okay=False),
    help="Path to the package whose fields files are resolved",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=True,
    type=click.Path(path_type=str, file_okay=False),
    help="Directory receiving the resolved fields files",
)
@_cache_dir_option
def build(package_root: str, output_dir: str, cache_dir: str | None) -> None:
    """Resolve external fields of every fields file in a package."""
    try:
        outcome = build_package_fields(
            BuildRequest(package_root=package_root, output_dir=output_dir),
            loader=_schema_loader(cache_dir),
        )
    except FieldsBuildError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        f"{len(outcome.written_files)} fields files written, "
        f"{len(outcome.changed_files)} with external fields: {outcome.output_dir}"
    )


def _schema_loader(cache_dir: str | None) -> SchemaLoader:
    return SchemaLoader(Path(cache_dir) if cache_dir else default_fields_cache_dir())


def _load_dependency_manager(
    manifest_path: str | None, loader: SchemaLoader
) -> DependencyManager | None:
    if manifest_path is None:
        return None
    manifest = load_build_manifest(manifest_path)
    return create_field_dependency_manager(manifest.dependencies, loader)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
