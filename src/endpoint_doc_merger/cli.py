"""
Command-line interface for Endpoint Documentation Merger.

This module provides the CLI using Click framework for argument parsing
and runs the documentation merge pipeline.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from endpoint_doc_merger import __version__
from endpoint_doc_merger.config import Config, find_config_file, load_config
from endpoint_doc_merger.models.doc import ApiDoc

console = Console(stderr=True)

FORMAT_CHOICES = ["text", "json", "yaml"]


def _setup_logging(verbose: bool) -> None:
    """Route package logs to the console when running verbosely."""
    if not verbose:
        return
    logger = logging.getLogger("endpoint_doc_merger")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def _write_output(docs: list[ApiDoc], config: Config, output_format: str, output: Optional[Path]) -> None:
    from endpoint_doc_merger.output.formatters import get_formatter

    options = {"colorize": config.output.colorize and output is None} if output_format == "text" else {}
    formatter = get_formatter(output_format, **options)
    formatted_output = formatter.format_docs(docs)

    if output:
        output.write_text(formatted_output, encoding="utf-8")
        console.print(f"[green]Results written to:[/green] {output}")
    else:
        # Print directly to stdout to preserve ANSI codes from formatter
        sys.stdout.write(formatted_output)
        sys.stdout.flush()


@click.group()
@click.version_option(version=__version__, prog_name="endpoint-doc-merger")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path]) -> None:
    """Endpoint Documentation Merger - Merge controller and handler routing metadata into endpoint docs."""
    ctx.ensure_object(dict)
    if config is None:
        config = find_config_file(Path.cwd())
    try:
        ctx.obj["config"] = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


@cli.command()
@click.option(
    "--table",
    "-t",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to a YAML or JSON metadata table.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.pass_context
def merge(
    ctx: click.Context,
    table: Path,
    output_format: str,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """Merge the routing metadata of a precomputed metadata table."""
    from endpoint_doc_merger.metadata.table import load_table
    from endpoint_doc_merger.scanner import DocScanner

    config: Config = ctx.obj["config"]
    verbose = verbose or config.output.verbose
    _setup_logging(verbose)

    if verbose:
        console.print(f"[blue]Merging metadata table:[/blue] {table}")

    try:
        docs = DocScanner(config).scan_table(load_table(table))
        _write_output(docs, config, output_format, output)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        raise click.Abort()


@cli.command()
@click.option(
    "--module",
    "-m",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to a Python file defining controllers.",
)
@click.option(
    "--controller",
    "controllers",
    multiple=True,
    help="Only document the named controller class (repeatable).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.pass_context
def reflect(
    ctx: click.Context,
    module: Path,
    controllers: tuple[str, ...],
    output_format: str,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """Document the controllers defined in a Python module."""
    from endpoint_doc_merger.scanner import DocScanner, find_controllers, load_module

    config: Config = ctx.obj["config"]
    verbose = verbose or config.output.verbose
    _setup_logging(verbose)

    if verbose:
        console.print(f"[blue]Importing controllers from:[/blue] {module}")

    try:
        found = find_controllers(load_module(module), controllers or None)
        missing = set(controllers) - {c.__name__ for c in found}
        if missing:
            console.print(f"[yellow]Controllers not found:[/yellow] {', '.join(sorted(missing))}")

        docs = DocScanner(config).scan_controllers(found)
        _write_output(docs, config, output_format, output)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        raise click.Abort()


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
