# mdcollect/core/discovery/walker.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple
import structlog

from mdcollect.config.settings import CollectorConfig
from mdcollect.core.discovery.pattern_matching import (
    extension_of,
    is_selected_extension,
    is_skipped_path,
)
from mdcollect.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

WarningCallback = Callable[[Path, str], None]

@dataclass(frozen=True)
class FileEntry:
    # a selected file, alive only while it is being processed.
    absolute_path: Path
    relative_path: str
    extension: str

def _describe_os_error(e: OSError) -> str:
    return e.strerror or str(e)

def _sorted_entries(directory: Path) -> List[os.DirEntry]:
    # lists a directory in lexicographic name order so output is reproducible.
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)

def walk_selected_files(config: CollectorConfig, on_warning: Optional[WarningCallback] = None) -> Iterator[FileEntry]:
    """
    Walks config.root_path depth-first and yields every selected file in traversal order.

    Files and directories are visited interleaved in name order at each level. Entries
    that cannot be accessed are reported through on_warning and skipped. A failure to
    list the root itself raises DiscoveryError.
    """
    log.info("directory_walk_started", root=str(config.root_path), recursive=config.recursive,
             extensions=sorted(config.extensions))

    try:
        root_entries = _sorted_entries(config.root_path)
    except OSError as e:
        raise DiscoveryError(f"cannot walk directory '{config.root_path}': {_describe_os_error(e)}") from e

    def warn(path: Path, reason: str):
        log.warning("walk_entry_skipped", path=str(path), reason=reason)
        if on_warning:
            on_warning(path, reason)

    yield from _walk_entries(root_entries, (), config, warn)

def _walk_entries(
    entries: List[os.DirEntry],
    parent_parts: Tuple[str, ...],
    config: CollectorConfig,
    warn: WarningCallback,
) -> Iterator[FileEntry]:
    for entry in entries:
        entry_path = Path(entry.path)
        parts = parent_parts + (entry.name,)

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            warn(entry_path, _describe_os_error(e))
            continue

        if is_dir:
            if not config.recursive:
                log.debug("subdirectory_not_descended", path=str(entry_path))
                continue
            try:
                children = _sorted_entries(entry_path)
            except OSError as e:
                # the whole subtree is dropped, the walk carries on with siblings.
                warn(entry_path, f"cannot read directory: {_describe_os_error(e)}")
                continue
            yield from _walk_entries(children, parts, config, warn)
            continue

        extension = extension_of(entry.name)
        if not is_selected_extension(extension, config.extensions):
            continue

        try:
            is_regular_file = entry.is_file()
        except OSError as e:
            warn(entry_path, _describe_os_error(e))
            continue
        if not is_regular_file:
            log.debug("non_regular_file_ignored", path=str(entry_path))
            continue

        if is_skipped_path(entry_path, config.skip_paths):
            log.info("skip_path_ignored", path=str(entry_path))
            continue

        yield FileEntry(absolute_path=entry_path, relative_path="/".join(parts), extension=extension)
