from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator
import structlog
from mdcollect.exceptions import OutputError

log = structlog.get_logger(__name__)

@contextmanager
def open_output_sink(output_file_path: Path) -> Iterator[BinaryIO]:
    # opens (creating or truncating) the output file and guarantees it is closed on every exit path.
    log.info("opening_output_sink", path=str(output_file_path))
    try:
        sink = output_file_path.open("wb")
    except OSError as e:
        raise OutputError(f"failed to open output file '{output_file_path}': {e}") from e

    try:
        yield sink
    except BaseException:
        sink.close()
        raise

    try:
        sink.close()
    except OSError as e:
        raise OutputError(f"failed to flush output file '{output_file_path}': {e}") from e
    log.info("output_sink_closed", path=str(output_file_path))

def write_piece(sink: BinaryIO, data: bytes, stage: str, relative_path: str):
    # writes one section piece; any failure is fatal for the run.
    try:
        sink.write(data)
    except (OSError, ValueError) as e:
        raise OutputError(
            f"failed to write {stage} for '{relative_path}': {e}",
            stage=stage,
            relative_path=relative_path,
        ) from e
