def timestamp_filename(prefix: str, when: float, suffix: str) -> str:
    """Build `<prefix>_<unix seconds><suffix>`, e.g. `OneNote_1700000000.zip`."""
    return f"{prefix}_{int(when)}{suffix}"
