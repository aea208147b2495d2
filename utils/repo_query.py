#!/usr/bin/env python3
"""Read-only repository queries for changelog generation.

This module wraps a git backend to look up tags, the remote URL, and the
commit log between two refs. Nothing here mutates repository state.
"""

import logging
from typing import List, Optional

from clients.git_client import GitBackend
from utils.errors import ReleaseError
from utils.release_models import CommitRecord

# Set up logging
logger = logging.getLogger(__name__)

LOG_FORMAT = "%h %H %s"


class RemoteNotFoundError(ReleaseError):
    """Raised when the configured remote has no URL; changelog links need it."""
    def __init__(self, message: str, code: str = "NO_REMOTE") -> None:
        super().__init__(message, code=code)


class RepoQuery:
    """Tag, remote and log lookups against a single repository."""

    def __init__(self, git: GitBackend, remote: str = "origin"):
        """Initialize the query helper.

        Args:
            git: Backend exposing describe/log/remote_url
            remote: Remote whose URL is used for changelog links
        """
        self.git = git
        self.remote = remote

    def latest_tag(self, pattern: Optional[str] = None) -> Optional[str]:
        """Return the most recent tag matching ``pattern``, or None if none exists.

        Args:
            pattern: Glob-style tag pattern, e.g. ``release-v*``; None matches any tag

        Returns:
            Tag name or None
        """
        tag = self.git.describe(pattern)
        logger.debug(f"latest tag for {pattern or '*'}: {tag}")
        return tag

    def remote_url(self) -> str:
        """Return the remote URL without a trailing ``.git``.

        Raises:
            RemoteNotFoundError: If the remote is not configured
        """
        url = self.git.remote_url(self.remote)
        if not url:
            raise RemoteNotFoundError(f"No URL configured for remote '{self.remote}'")
        if url.endswith(".git"):
            url = url[: -len(".git")]
        return url

    def log_range(self, from_tag: Optional[str], to_ref: str) -> List[CommitRecord]:
        """Return commits after ``from_tag`` up to and including ``to_ref``.

        Args:
            from_tag: Exclusive lower bound; None means the full history of ``to_ref``
            to_ref: Inclusive upper bound (branch, tag or commit)

        Returns:
            Commit records in the order git emits them
        """
        rev = f"{from_tag}..{to_ref}" if from_tag else to_ref
        raw = self.git.log(rev, LOG_FORMAT)
        commits = parse_log(raw)
        logger.info(f"Collected {len(commits)} commits for {rev}")
        return commits


def parse_log(raw: str) -> List[CommitRecord]:
    """Split ``%h %H %s`` log output into commit records, skipping blank lines."""
    commits: List[CommitRecord] = []
    for line in (raw or "").splitlines():
        if not line.strip():
            continue
        parts = line.split(" ", 2)
        if len(parts) < 2:
            continue
        subject = parts[2] if len(parts) > 2 else ""
        commits.append(CommitRecord(short_hash=parts[0], full_hash=parts[1], subject=subject))
    return commits
