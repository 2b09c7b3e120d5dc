# mdcollect/core/pipeline.py
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.console import Console as RichConsole
import structlog
import logging as stdlib_logging

from mdcollect.config.settings import CollectorConfig
from mdcollect.core.discovery.walker import FileEntry, walk_selected_files
from mdcollect.core.output import write_piece
from mdcollect.core.processing import build_section_pieces, read_file_content
from mdcollect.exceptions import DiscoveryError, MdCollectError, OutputError


log = structlog.get_logger(__name__)

ProcessingCallback = Callable[[FileEntry], None]
WarningCallback = Callable[[Path, str], None]


@dataclass
class CollectionResult:
    # outcome of one run. warnings never set fatal_error.
    files_written: int = 0
    warnings: int = 0
    fatal_error: Optional[MdCollectError] = None

    @property
    def ok(self) -> bool:
        return self.fatal_error is None


class MarkdownCollector:
    # walks the configured tree and writes one markdown section per selected file.
    def __init__(
        self,
        config: CollectorConfig,
        on_processing: Optional[ProcessingCallback] = None,
        on_warning: Optional[WarningCallback] = None,
    ):
        self.config: CollectorConfig = config
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.on_processing = on_processing
        self.on_warning = on_warning
        self.result = CollectionResult()

    def _warn(self, path: Path, reason: str):
        self.result.warnings += 1
        if self.on_warning:
            self.on_warning(path, reason)

    def _emit_entry(self, sink: BinaryIO, entry: FileEntry):
        # reads one file and writes its section before the walk moves on.
        if self.on_processing:
            self.on_processing(entry)
        self.log.debug("processing_file", path=entry.relative_path)

        content, error_reason = read_file_content(entry)
        if content is None:
            self._warn(entry.absolute_path, f"cannot read file: {error_reason}")
            return

        for stage, data in build_section_pieces(entry, content):
            write_piece(sink, data, stage, entry.relative_path)

        self.result.files_written += 1
        self.log.debug("file_section_written", path=entry.relative_path, size=len(content))

    def run(self, sink: BinaryIO) -> CollectionResult:
        # runs the whole collection. fatal errors end the walk and are recorded on the result.
        app_log_level = stdlib_logging.getLogger("mdcollect").getEffectiveLevel()
        progress_disabled = app_log_level > stdlib_logging.INFO or not sys.stderr.isatty()
        stderr_console = RichConsole(file=sys.stderr)

        self.log.info("collection_started", root=str(self.config.root_path))
        with Progress(
            SpinnerColumn(), TextColumn("[bold blue]{task.description}"),
            transient=True, disable=progress_disabled, console=stderr_console
        ) as progress:
            collect_task = progress.add_task("collecting files...", total=None)
            try:
                for entry in walk_selected_files(self.config, self._warn):
                    progress.update(collect_task, description=f"processing {entry.relative_path}")
                    self._emit_entry(sink, entry)
            except (DiscoveryError, OutputError) as e:
                self.log.info("collection_aborted", error_type=type(e).__name__, message=str(e),
                               files_written=self.result.files_written)
                self.result.fatal_error = e

        self.log.info("collection_finished", files_written=self.result.files_written,
                      warnings=self.result.warnings, ok=self.result.ok)
        return self.result


def collect(
    config: CollectorConfig,
    sink: BinaryIO,
    on_processing: Optional[ProcessingCallback] = None,
    on_warning: Optional[WarningCallback] = None,
) -> CollectionResult:
    """Writes the markdown document for config to sink and reports how many files made it in."""
    return MarkdownCollector(config, on_processing, on_warning).run(sink)
