"""
Persist a rendered changelog to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class ReportWriteError(Exception):
    """Raised when the changelog cannot be written."""

    pass


def write_report(path: Union[str, Path], content: str) -> Path:
    """Write ``content`` to ``path`` as UTF-8, creating parent directories.

    Returns
    -------
    Path
        The path that was written.

    Raises
    ------
    ReportWriteError
        If the file or its parent directory cannot be written.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write changelog to %s: %s", target, exc)
        raise ReportWriteError(f"Could not write {target}: {exc}") from exc
    logger.debug("Wrote %d characters to %s", len(content), target)
    return target
