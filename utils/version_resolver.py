#!/usr/bin/env python3
from __future__ import annotations

import logging
from typing import Optional, Tuple

from utils.errors import ReleaseError
from utils.release_models import IncrementKind, Version
from utils.repo_query import RepoQuery

logger = logging.getLogger(__name__)

INCREMENTS = ("major", "minor", "patch")


class InvalidIncrementError(ReleaseError):
    def __init__(self, message: str, code: str = "INVALID_INCREMENT") -> None:
        super().__init__(message, code=code)


def normalize_increment(increment: str) -> IncrementKind:
    value = (increment or "").strip().lower()
    if value not in INCREMENTS:
        raise InvalidIncrementError(f"Invalid increment: {increment!r} (expected major, minor or patch)")
    return value  # type: ignore[return-value]


def tag_pattern(branch: str) -> str:
    return f"{branch}-v*"


def parse_components(text: str) -> Optional[Tuple[int, int, int]]:
    """Parse ``<major>.<minor>.<patch>``; None unless exactly three non-negative integers."""
    parts = (text or "").split(".")
    if len(parts) != 3:
        return None
    try:
        numbers = tuple(int(p) for p in parts)
    except ValueError:
        return None
    if any(n < 0 for n in numbers):
        return None
    return numbers  # type: ignore[return-value]


class VersionResolver:
    """Computes the next ``<branch>-v<major>.<minor>.<patch>`` tag."""

    def __init__(self, query: RepoQuery, baseline: str = "1.0.0") -> None:
        self.query = query
        self.baseline = parse_components(baseline) or (1, 0, 0)

    def current(self, branch: str) -> Tuple[Version, Optional[str]]:
        """Return the version of the latest ``<branch>-v*`` tag (or the baseline) and that tag."""
        major, minor, patch = self.baseline
        latest = self.query.latest_tag(tag_pattern(branch))
        if latest:
            prefix = f"{branch}-v"
            suffix = latest[len(prefix):] if latest.startswith(prefix) else latest.split("-v", 1)[-1]
            parsed = parse_components(suffix)
            if parsed:
                major, minor, patch = parsed
            else:
                logger.debug(f"tag {latest} does not parse as major.minor.patch; using baseline")
        return Version(branch=branch, major=major, minor=minor, patch=patch), latest

    def resolve(self, branch: str, increment: str) -> Tuple[Version, Optional[str]]:
        """Bump exactly one component of the current version by one.

        Returns:
            The new version and the ``<branch>-v*`` tag it was derived from (None for the baseline)

        Raises:
            InvalidIncrementError: If ``increment`` is not major, minor or patch
        """
        kind = normalize_increment(increment)
        current, latest = self.current(branch)
        new = current.bump(kind)
        logger.info(f"Resolved {new.tag} from {latest or 'baseline'} ({kind})")
        return new, latest

    def next_version(self, branch: str, increment: str) -> Version:
        return self.resolve(branch, increment)[0]
