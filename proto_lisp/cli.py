"""
Command-line interface for Lisp code generation.

Reads descriptor documents from files or URLs and writes one Lisp
source file per described .proto file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigError,
    DescriptorError,
    GeneratorConfig,
    extract_files,
    generate_file,
    load_config,
)
from .codegen.core.config import get_config_manager
from .codegen.core.descriptors import FileDescriptor
from .codegen.core.generator import GenerationResult
from .codegen.core.naming import output_file_name
from .logging_config import configure_logging, get_logger
from .utils import DescriptorLoaderError, load_descriptor

logger = get_logger(__name__)

# Status goes to stderr so --stdout output can be piped
console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="proto-lisp",
        description="Generate cl-protobufs Lisp source from protobuf descriptors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  proto-lisp addressbook.json -o generated/
  proto-lisp descriptor_set.json --package MY-PROTOS --stdout
  proto-lisp --url https://example.com/descriptors.json -o out/
        """.strip(),
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="DESCRIPTOR",
        help="JSON descriptor files (file, descriptor set, or generator request)",
    )
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        help="URL to fetch a JSON descriptor from (repeatable)",
    )
    parser.add_argument(
        "--timeout", type=int, default=30, help="URL request timeout in seconds"
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output-dir", "-o", metavar="DIR", help="Directory for generated files"
    )
    output_group.add_argument(
        "--stdout",
        action="store_true",
        help="Write generated code to standard output instead of files",
    )

    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument("--config", metavar="FILE", help="JSON configuration file")
    gen_group.add_argument(
        "--package", metavar="NAME", help="Lisp package for every generated file"
    )
    gen_group.add_argument(
        "--no-comments", action="store_true", help="Omit section comments"
    )
    gen_group.add_argument(
        "--no-sbcl-optimize",
        action="store_true",
        help="Omit the SBCL optimize declaim",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging and metadata"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI overrides."""
    overrides: dict[str, Any] = {}

    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.package is not None:
        overrides["package_override"] = args.package
    if args.no_comments:
        overrides["add_comments"] = False
    if args.no_sbcl_optimize:
        overrides["sbcl_optimize"] = False

    return load_config(custom_config=overrides, config_file=args.config)


def _load_files(source: str, is_url: bool, timeout: int) -> list[FileDescriptor]:
    if is_url:
        return extract_files(load_descriptor(url=source, timeout=timeout))
    return extract_files(load_descriptor(file_path=source))


def _write_output(
    result: GenerationResult,
    file: FileDescriptor,
    config: GeneratorConfig,
    to_stdout: bool,
) -> Path | None:
    if to_stdout:
        sys.stdout.write(result.code)
        return None

    output_path = Path(config.output_dir or ".") / output_file_name(
        file.name, config.file_extension
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, encoding="utf-8")
    logger.info("Wrote %s", output_path)
    return output_path


def _print_metadata(results: list[GenerationResult]) -> None:
    table = Table(
        title="Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("File", style="bold")
    table.add_column("Schema")
    table.add_column("Package", style="green")
    table.add_column("Enums", justify="right")
    table.add_column("Messages", justify="right")
    table.add_column("Extensions", justify="right")
    table.add_column("Services", justify="right")

    for result in results:
        meta = result.metadata
        table.add_row(
            meta["file"],
            meta["schema_name"],
            meta["lisp_package"] or "-",
            str(meta["enum_count"]),
            str(meta["message_count"]),
            str(meta["extension_count"]),
            str(meta["service_count"]),
        )

    console.print()
    console.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the generator.

    A file that fails does not stop the others; the exit code is 1 if
    anything failed.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if not args.inputs and not args.url:
        parser.error("at least one descriptor file or --url is required")

    try:
        config = _build_config(args)
    except ConfigError as e:
        console.print(f"[red]✗ Configuration error:[/red] {e}")
        return 1

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    sources = [(path, False) for path in args.inputs] + [(url, True) for url in args.url]
    failures = 0
    succeeded: list[GenerationResult] = []

    for source, is_url in sources:
        try:
            files = _load_files(source, is_url, args.timeout)
        except (DescriptorLoaderError, DescriptorError, FileNotFoundError) as e:
            console.print(f"[red]✗ {source}:[/red] {e}")
            failures += 1
            continue

        for file in files:
            result = generate_file(file, config)
            if not result.success:
                console.print(f"[red]✗ {file.name}:[/red] {result.error_message}")
                failures += 1
                continue

            try:
                output_path = _write_output(result, file, config, args.stdout)
            except OSError as e:
                console.print(f"[red]✗ Failed to write {file.name}:[/red] {e}")
                failures += 1
                continue

            succeeded.append(result)
            if output_path is not None:
                console.print(f"[green]✓[/green] {file.name} → [cyan]{output_path}[/cyan]")

    if args.verbose and succeeded:
        _print_metadata(succeeded)

    if failures:
        console.print(f"[red]{failures} failure(s)[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
