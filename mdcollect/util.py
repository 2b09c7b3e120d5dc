LANGUAGE_TAG_OVERRIDES = {"md": "markdown"}

def get_language_hint(extension: str) -> str:
    # language tag for the opening code fence: the lowercased extension without its leading dot.
    ext = extension.lower().strip(".")
    return LANGUAGE_TAG_OVERRIDES.get(ext, ext)
