#!/usr/bin/env python3
"""Commit the updated changelog and create the annotated release tag.

Steps run in order with no rollback: a failure at the commit or tag step
leaves the earlier steps in place and propagates as GitCommandError.
"""

from __future__ import annotations

import logging

from clients.git_client import GitBackend

logger = logging.getLogger(__name__)


def commit_message(version: str) -> str:
    return f"chore: changelog for version {version}"


def tag_message(version: str) -> str:
    return f"Version {version}"


class ReleaseCommitter:
    def __init__(self, git: GitBackend, changelog_path: str = "CHANGELOG.md"):
        self.git = git
        self.changelog_path = changelog_path

    def commit_and_tag(self, version: str) -> None:
        self.git.add(self.changelog_path)
        logger.debug(f"staged {self.changelog_path}")
        self.git.commit(commit_message(version))
        logger.debug(f"committed changelog for {version}")
        self.git.tag_annotated(version, tag_message(version))
        logger.info(f"Created annotated tag {version}")
