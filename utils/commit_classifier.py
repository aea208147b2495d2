#!/usr/bin/env python3
"""Conventional-commit classification of commit subjects.

Subjects that do not look like ``<type>[(<scope>)]: <description>`` are left
out of the changelog on purpose; they are not errors.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from utils.release_models import NO_SCOPE, ClassifiedCommit, ClassifiedLog, CommitRecord

# chore is a known type but is not harvested, so release commits never feed the next entry
RECOGNIZED_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "perf")

SUBJECT_RE = re.compile(
    r"^\s*(?P<type>" + "|".join(RECOGNIZED_TYPES) + r")(?:\((?P<scope>.+)\))?:\s*(?P<description>.*)"
)


def classify_commit(commit: CommitRecord) -> Optional[ClassifiedCommit]:
    m = SUBJECT_RE.match(commit.subject or "")
    if not m:
        return None
    return ClassifiedCommit(
        short_hash=commit.short_hash,
        full_hash=commit.full_hash,
        subject=commit.subject,
        type=m.group("type"),
        scope=m.group("scope") or NO_SCOPE,
        description=m.group("description"),
    )


def classify_commits(commits: Iterable[CommitRecord]) -> ClassifiedLog:
    """Group matching commits by scope then type, keeping log order within groups."""
    log = ClassifiedLog()
    for commit in commits:
        classified = classify_commit(commit)
        if classified is not None:
            log.add(classified)
    return log
