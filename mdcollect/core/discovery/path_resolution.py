from pathlib import Path
from typing import Callable, Optional
import structlog

from mdcollect.exceptions import ConfigError

log = structlog.get_logger(__name__)

def resolve_root_path(raw_path: Optional[Path], notify: Optional[Callable[[str], None]] = None) -> Path:
    # determines the absolute root directory for the walk, defaulting to the current directory.
    if raw_path is None:
        raw_path = Path.cwd()
        log.info("root_path_defaulted_to_cwd", path=str(raw_path))
        if notify:
            notify(f"No directory given, using current directory: {raw_path}")

    try:
        abs_path = raw_path.resolve(strict=True)
    except FileNotFoundError:
        raise ConfigError(f"directory does not exist: {raw_path}")
    except OSError as e:
        raise ConfigError(f"cannot access directory '{raw_path}': {e}")

    if not abs_path.is_dir():
        raise ConfigError(f"not a directory: {raw_path}")

    log.info("root_path_resolved", path=str(abs_path))
    return abs_path
