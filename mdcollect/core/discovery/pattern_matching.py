# mdcollect/core/discovery/pattern_matching.py
from pathlib import Path
from typing import FrozenSet

def extension_of(file_name: str) -> str:
    # returns everything from the last dot of the base name, dot included; "" when there is none.
    dot_index = file_name.rfind(".")
    if dot_index == -1:
        return ""
    return file_name[dot_index:]

def is_selected_extension(extension: str, extensions: FrozenSet[str]) -> bool:
    # exact, case-sensitive membership. files without an extension never match.
    return bool(extension) and extension in extensions

def is_skipped_path(absolute_path: Path, skip_paths: FrozenSet[Path]) -> bool:
    if not skip_paths:
        return False
    return absolute_path.resolve() in skip_paths
