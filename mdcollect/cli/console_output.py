# mdcollect/cli/console_output.py
"""
Handles the diagnostic channel (stderr) during CLI execution: per-file notices,
skip warnings and the final summary. Nothing here touches the markdown document.
"""
from pathlib import Path

import click
import structlog

from mdcollect.core.discovery.walker import FileEntry

log = structlog.get_logger(__name__)

def print_info_notice(message: str):
    click.echo(f"Info: {message}", err=True)

def print_processing_notice(entry: FileEntry):
    click.echo(f"Processing: {entry.relative_path}", err=True)

def print_skip_warning(path: Path, reason: str):
    click.secho(f"Warning: skipping {path}: {reason}", fg="yellow", err=True)

def print_cli_summary_output(result, output_file: Path):
    """
    Prints the success summary. 'result' is a CollectionResult from a run
    that finished without a fatal error.
    """
    log.debug("console_summary_output_requested", files_written=result.files_written)
    noun = "file" if result.files_written == 1 else "files"
    message = f"Wrote {result.files_written} {noun} to {output_file}"
    if result.warnings:
        message += f" ({result.warnings} skipped with warnings)"
    click.secho(message, fg="green", err=True)
