# mdcollect/core/processing.py
"""
Turns a selected file into the four pieces of its Markdown section:
header, opening fence, raw content, closing fence.
"""
from typing import List, Optional, Tuple
import structlog

from mdcollect.core.discovery.walker import FileEntry
from mdcollect.util import get_language_hint

log = structlog.get_logger(__name__)

CODE_FENCE = "```"
# names from os.scandir carry undecodable bytes as surrogates; write them back out unchanged.
NAME_ERRORS = "surrogateescape"

def render_header(relative_path: str) -> bytes:
    return f"## File: `{relative_path}`\n\n".encode("utf-8", NAME_ERRORS)

def render_opening_fence(extension: str) -> bytes:
    return f"{CODE_FENCE}{get_language_hint(extension)}\n".encode("utf-8", NAME_ERRORS)

def render_closing_fence() -> bytes:
    return f"\n{CODE_FENCE}\n\n".encode("utf-8")

def read_file_content(entry: FileEntry) -> Tuple[Optional[bytes], Optional[str]]:
    # reads raw bytes, no decoding or newline handling. returns (content, error_reason).
    try:
        return entry.absolute_path.read_bytes(), None
    except OSError as e:
        log.warning("file_read_error_in_processing", path=entry.relative_path, error=str(e))
        return None, e.strerror or str(e)

def build_section_pieces(entry: FileEntry, content: bytes) -> List[Tuple[str, bytes]]:
    # ordered (stage, data) pairs; the stage names the piece in write errors.
    return [
        ("header", render_header(entry.relative_path)),
        ("opening fence", render_opening_fence(entry.extension)),
        ("content", content),
        ("closing fence", render_closing_fence()),
    ]
