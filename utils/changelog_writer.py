#!/usr/bin/env python3
"""Prepend changelog entries to a Markdown file (newest entry on top)."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def read_existing(path: Path) -> str:
    """Return the current file content, or an empty string if the file is absent."""
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def prepend(path: str, entry: str) -> bool:
    """Rewrite ``path`` as ``entry`` followed by its previous content.

    A symlinked changelog is rewritten at its target, so the link survives.
    Write failures are logged and reported as False; callers carry on.
    """
    target = Path(os.path.realpath(path))
    tmp = target.with_name(target.name + ".tmp")
    try:
        content = entry + read_existing(target)
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, target)
    except (OSError, UnicodeError) as e:
        logger.error(f"Failed to write changelog {target}: {e}")
        try:
            tmp.unlink(missing_ok=True)
        except OSError as cleanup_error:
            logger.warning(f"Could not remove {tmp}: {cleanup_error}")
        return False
    logger.info(f"Prepended {len(entry)} chars to {target}")
    return True
