"""Local template discovery."""

import re
from pathlib import Path

from .exceptions import TemplateScanError

_INVALID_ID_CHARS = re.compile(r"[^a-z0-9-]")


def normalize_template_id(name: str) -> str:
    """Lowercase a folder name and replace anything outside ``[a-z0-9-]`` with ``-``."""
    return _INVALID_ID_CHARS.sub("-", name.lower())


def scan_template_dir(templates_dir: Path) -> list[str]:
    """Return normalized ids for every template folder under ``templates_dir``.

    Only immediate subdirectories count; files and dot-directories are skipped.
    Ids are ordered alphabetically (by normalized id) so repeated scans agree.

    Raises:
        TemplateScanError: If the directory is missing or unreadable
    """
    templates_dir = Path(templates_dir)
    if not templates_dir.is_dir():
        raise TemplateScanError(f"Templates directory not found: {templates_dir}")

    try:
        entries = sorted(
            templates_dir.iterdir(),
            key=lambda entry: (normalize_template_id(entry.name), entry.name),
        )
    except OSError as e:
        raise TemplateScanError(f"Failed to read {templates_dir}: {e}") from e

    return [
        normalize_template_id(entry.name)
        for entry in entries
        if entry.is_dir() and not entry.name.startswith(".")
    ]
