"""CDI generator CLI entry points.

This module exposes non-interactive commands for importing datasets,
populating templates, and naming NEMO files. It maps argparse commands
onto the import pipeline and report generator.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Any, Mapping, Sequence

import yaml

from core.config import CdiConfig
from core.constants import FILE_ENCODING, PANGAEA_SOURCE_NAME
from core.errors import CdiConfigError, CdiError, CdiOutputError
from core.logging_config import enable_verbose_logging
from core.types import GenerationResult, OutputKind
from ingest.data_source import DataSource
from output.naming import output_file_name
from report.generator import CdiGenerator
from sources.registry import available_sources, build_source
from templating.template_engine import (
    find_template_tags,
    load_template,
    mapping_resolver,
    populate_template,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="cdi-generator",
        description="Import scientific datasets and generate NEMO files",
    )
    parser.add_argument("--config", help="YAML config file; environment values fill the gaps")
    parser.add_argument("--temp-dir", help="Override the dataset cache directory")
    parser.add_argument("--output-dir", help="Override the NEMO output directory")
    parser.add_argument("--verbose", action="store_true", help="Log progress events to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_sources_command(subparsers)
    _add_import_command(subparsers)
    _add_populate_command(subparsers)
    _add_output_name_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CDI generator CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        enable_verbose_logging()
    try:
        if args.command == "sources":
            return _run_sources_command()
        if args.command == "import":
            return _run_import_command(_build_config(args), args)
        if args.command == "populate":
            return _run_populate_command(args)
        if args.command == "output-name":
            return _run_output_name_command(args)
    except CdiError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> CdiConfig:
    """Build config from file or env, then apply CLI overrides."""
    config = CdiConfig.from_file(args.config) if args.config else CdiConfig.from_env()
    if args.temp_dir:
        config = replace(config, temp_dir=Path(args.temp_dir).expanduser().resolve())
    if args.output_dir:
        config = replace(config, nemo_output_dir=Path(args.output_dir).expanduser().resolve())
    if args.reuse_cache:
        config = replace(config, reuse_cache=True)
    return config


def _run_sources_command() -> int:
    for name in available_sources():
        print(name)
    return 0


def _run_import_command(config: CdiConfig, args: argparse.Namespace) -> int:
    """Handle import command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code: 0 when every dataset succeeded, 1 when any failed,
        2 when the ids are missing or malformed.
    """
    source_options: dict[str, Any] = {}
    if args.data_type:
        source_options["nemo_data_type"] = args.data_type
    source = build_source(args.source, config, **source_options)
    dataset_ids = [dataset_id.strip() for dataset_id in args.ids if dataset_id.strip()]
    if args.id_file:
        dataset_ids.extend(_read_id_file(Path(args.id_file)))
    if not dataset_ids:
        print(f"error: supply at least one of the {source.ids_descriptor}", file=sys.stderr)
        return 2
    if not _ids_are_valid(source, dataset_ids):
        return 2
    report_template = _load_checked_template(args.template)
    summary_template = _load_checked_template(args.summary_template)
    generator = CdiGenerator(source, config)
    results = generator.run(dataset_ids, report_template, summary_template)
    for result in results:
        print(_format_result(result))
    return 0 if all(result.success for result in results) else 1


def _run_populate_command(args: argparse.Namespace) -> int:
    """Handle populate command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    template = load_template(args.template)
    values = _load_values(Path(args.values))
    populated = populate_template(template, mapping_resolver(values))
    if args.output:
        output_path = Path(args.output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(populated, encoding=FILE_ENCODING)
        except OSError as error:
            raise CdiOutputError(
                f"Failed to write populated template to {output_path}: {error}"
            ) from error
        print(args.output)
    else:
        sys.stdout.write(populated)
    return 0


def _run_output_name_command(args: argparse.Namespace) -> int:
    kind = OutputKind(args.kind)
    print(output_file_name(kind, args.internal_id, args.station, args.data_type, args.format))
    return 0


def _read_id_file(id_file: Path) -> list[str]:
    """Read dataset ids, one per line, ignoring blank lines.

    Raises:
        CdiConfigError: If the file cannot be read.
    """
    if not id_file.is_file():
        raise CdiConfigError(f"Id file {id_file} does not exist or is not a file.")
    try:
        text = id_file.read_text(encoding=FILE_ENCODING)
    except OSError as error:
        raise CdiConfigError(f"Cannot access id file {id_file}: {error}") from error
    return [line.strip() for line in text.splitlines() if line.strip()]


def _ids_are_valid(source: DataSource, dataset_ids: Sequence[str]) -> bool:
    valid = True
    for dataset_id in dataset_ids:
        if not source.validate_id_format(dataset_id):
            valid = False
            print(
                f"ID '{dataset_id}' is not a valid id - must be of the form '{source.id_format}'",
                file=sys.stderr,
            )
    return valid


def _load_checked_template(template_path: str | None) -> str | None:
    """Load a template and reject malformed tag syntax before importing."""
    if template_path is None:
        return None
    template = load_template(template_path)
    find_template_tags(template)
    return template


def _load_values(values_path: Path) -> Mapping[str, object]:
    """Load template tag values from a YAML mapping.

    Raises:
        CdiConfigError: If the file is unreadable or not a mapping.
    """
    try:
        payload = yaml.safe_load(values_path.read_text(encoding=FILE_ENCODING))
    except OSError as error:
        raise CdiConfigError(f"Failed to read tag values at {values_path}: {error}") from error
    except yaml.YAMLError as error:
        raise CdiConfigError(f"Failed to parse tag values at {values_path}: {error}") from error
    if not isinstance(payload, Mapping):
        raise CdiConfigError(f"Tag values at {values_path} must be a YAML mapping.")
    return payload


def _format_result(result: GenerationResult) -> str:
    status = "ok" if result.success else "failed"
    columns = [result.dataset_id, status]
    if result.report_path is not None:
        columns.append(str(result.report_path))
    elif not result.success and result.message:
        columns.append(result.message)
    return "\t".join(columns)


def _add_sources_command(subparsers: Any) -> None:
    """Register sources subcommand."""
    subparsers.add_parser("sources", help="List available data sources")


def _add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import datasets and write NEMO files")
    parser.add_argument("ids", nargs="*", help="Dataset ids, e.g. DOIs")
    parser.add_argument(
        "--source",
        default=PANGAEA_SOURCE_NAME,
        choices=available_sources(),
        help="Data source",
    )
    parser.add_argument("--id-file", help="File with one dataset id per line")
    parser.add_argument("--template", help="NEMO report template")
    parser.add_argument("--summary-template", help="NEMO summary template")
    parser.add_argument("--data-type", help="NEMO data type code, e.g. CTD")
    parser.add_argument(
        "--reuse-cache",
        action="store_true",
        help="Skip fetching when cache files already exist",
    )


def _add_populate_command(subparsers: Any) -> None:
    """Register populate subcommand."""
    parser = subparsers.add_parser("populate", help="Populate a template from YAML values")
    parser.add_argument("template", help="Template file")
    parser.add_argument("--values", required=True, help="YAML mapping of tag values")
    parser.add_argument("--output", help="Output file; defaults to stdout")


def _add_output_name_command(subparsers: Any) -> None:
    """Register output-name subcommand."""
    parser = subparsers.add_parser("output-name", help="Print a NEMO output file name")
    parser.add_argument("--internal-id", required=True, help="Internal dataset id")
    parser.add_argument("--station", type=int, required=True, help="Station number")
    parser.add_argument("--data-type", required=True, help="NEMO data type code")
    parser.add_argument("--format", required=True, help="NEMO output format")
    parser.add_argument(
        "--kind",
        default=OutputKind.REPORT.value,
        choices=[kind.value for kind in OutputKind],
        help="Output kind",
    )
