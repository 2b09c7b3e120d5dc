# mdcollect/cli/interface.py
import sys
from pathlib import Path
from typing import Optional

import click
from click_option_group import optgroup
import structlog

from mdcollect import __version__ as app_version
from mdcollect.config.settings import CollectorConfig, DEFAULT_EXTENSIONS
from mdcollect.cli.console_output import (
    print_cli_summary_output, print_info_notice, print_processing_notice, print_skip_warning
)
from mdcollect.logging_setup import configure_logging
from mdcollect.core.discovery.path_resolution import resolve_root_path
from mdcollect.core.output import open_output_sink
from mdcollect.core.pipeline import collect
from mdcollect.exceptions import MdCollectError, ConfigError

log = structlog.get_logger(__name__)

EXIT_FATAL_ERROR = 1

def _run_collection_flow(config: CollectorConfig, output_file: Path):
    log.info("collection_orchestration_started", root=str(config.root_path), output=str(output_file))

    with open_output_sink(output_file) as sink:
        result = collect(
            config, sink,
            on_processing=print_processing_notice,
            on_warning=print_skip_warning,
        )

    if not result.ok:
        raise result.fatal_error

    print_cli_summary_output(result, output_file)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Input Options", help="Choose the directory and the files to collect.")
@optgroup.option("-d", "--dir", "root_dir", type=click.Path(path_type=Path), default=None, help="Root directory to walk. Default: the current directory.")
@optgroup.option("-e", "--extensions", "extensions_csv", default=DEFAULT_EXTENSIONS, show_default=True, help="Comma-separated file extensions to include (leading dot optional, case-sensitive).")
@optgroup.option("-r", "--recursive", "recursive", is_flag=True, default=False, help="Descend into subdirectories.")
@optgroup.group("Output Options", help="Where the markdown document goes.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, path_type=Path), required=True, help="Path of the markdown file to write (created or truncated).")
@optgroup.group("Application Behavior", help="Logging and diagnostics.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="mdcollect", prog_name="mdcollect", help="Show version and exit.")
@click.pass_context
def main_cli(
    ctx: click.Context,
    root_dir: Optional[Path],
    extensions_csv: str,
    recursive: bool,
    output_file: Path,
    verbosity_level: int,
    force_json_logs_cli: bool,
):
    """mdcollect: concatenate source files from a directory into one
    markdown document, ready to paste into an LLM chat."""

    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs_cli)

    log.debug("cli_command_invoked", root_dir=str(root_dir) if root_dir else None,
              extensions=extensions_csv, recursive=recursive, output=str(output_file))

    try:
        try:
            root_path = resolve_root_path(root_dir, notify=print_info_notice)
            config = CollectorConfig.from_options(
                root_path, extensions_csv, recursive, skip_paths=[output_file]
            )
        except ConfigError as e:
            raise click.UsageError(str(e), ctx=ctx)

        _run_collection_flow(config, output_file)

    except click.exceptions.Exit as e: raise e
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except MdCollectError as e:
        log.debug("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(EXIT_FATAL_ERROR)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(EXIT_FATAL_ERROR)
