from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional
import structlog

from mdcollect.exceptions import ConfigError

log = structlog.get_logger(__name__)

DEFAULT_EXTENSIONS = ".go,.md"
DEFAULT_RECURSIVE = False

def parse_extension_list(raw: Optional[str]) -> FrozenSet[str]:
    # splits a comma-separated extension list into normalized, dot-prefixed entries.
    extensions = set()
    for entry in (raw or "").split(","):
        entry = entry.strip()
        if not entry:
            continue
        if not entry.startswith("."):
            entry = "." + entry
        extensions.add(entry)

    if not extensions:
        raise ConfigError(f"no valid file extensions in {raw!r}")

    log.debug("extensions_parsed", raw=raw, extensions=sorted(extensions))
    return frozenset(extensions)

@dataclass(frozen=True)
class CollectorConfig:
    # holds all configuration parameters for a single run. immutable once built.
    root_path: Path
    extensions: FrozenSet[str]
    recursive: bool = DEFAULT_RECURSIVE
    skip_paths: FrozenSet[Path] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.extensions:
            raise ConfigError("at least one file extension is required")
        bad = sorted(ext for ext in self.extensions if not ext.startswith("."))
        if bad:
            raise ConfigError(f"extensions must be dot-prefixed: {bad}")

    @classmethod
    def from_options(
        cls,
        root_path: Path,
        extensions_csv: Optional[str] = DEFAULT_EXTENSIONS,
        recursive: bool = DEFAULT_RECURSIVE,
        skip_paths: Iterable[Path] = (),
    ) -> "CollectorConfig":
        return cls(
            root_path=root_path,
            extensions=parse_extension_list(extensions_csv),
            recursive=recursive,
            skip_paths=frozenset(Path(p).resolve() for p in skip_paths),
        )
