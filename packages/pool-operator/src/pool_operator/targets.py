"""Target source resolution.

Target names come from a text file (one name per line, blank lines
ignored) and/or names given inline on the command line. Order is kept
exactly as given; duplicates are kept.
"""

import logging
from pathlib import Path
from typing import Iterable

from pool_operator.exceptions import EmptySourceError, TargetSourceError

logger = logging.getLogger(__name__)


def parse_targets(text: str) -> list[str]:
    """Split source text into target names, dropping blank lines."""
    names = []
    for line in text.splitlines():
        name = line.strip()
        if name:
            names.append(name)
    return names


def load_targets(path: Path) -> list[str]:
    """
    Read target names from a file.

    Args:
        path: File with one target name per line

    Returns:
        Non-empty list of names in file order

    Raises:
        TargetSourceError: If the file cannot be read
        EmptySourceError: If the file holds no non-blank lines
    """
    try:
        # utf-8-sig strips the BOM Notepad and PowerShell like to write
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TargetSourceError(str(path), str(e)) from e

    names = parse_targets(text)
    if not names:
        raise EmptySourceError(str(path))

    logger.debug("Loaded %d target(s) from %s", len(names), path)
    return names


def resolve_targets(
    path: Path | None = None,
    names: Iterable[str] | None = None,
) -> list[str]:
    """
    Build the ordered target list from a file and/or inline names.

    File names come first, followed by inline names.

    Raises:
        TargetSourceError: If the file cannot be read
        EmptySourceError: If no non-blank names remain overall
    """
    resolved: list[str] = []
    sources: list[str] = []

    if path is not None:
        sources.append(str(path))
        try:
            resolved.extend(load_targets(path))
        except EmptySourceError:
            # Inline names may still make the list usable
            if not names:
                raise

    if names:
        sources.append("inline targets")
        resolved.extend(n.strip() for n in names if n and n.strip())

    if not resolved:
        raise EmptySourceError(" and ".join(sources) or "no target source given")

    return resolved
