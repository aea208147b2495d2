#!/usr/bin/env python3
"""Release models for version resolution, commit classification and rendering.

Everything here is built and discarded within a single run; only the
changelog file and the release commit/tag outlive the process.
"""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, conint

IncrementKind = Literal["major", "minor", "patch"]

CommitType = Literal[
	"feat",
	"fix",
	"chore",
	"docs",
	"style",
	"refactor",
	"test",
	"perf",
]

NO_SCOPE = "none"


class _FrozenModel(BaseModel):
	model_config = ConfigDict(extra="forbid", frozen=True)


class Version(_FrozenModel):
	"""A branch-prefixed version, serialized as ``<branch>-v<major>.<minor>.<patch>``."""

	branch: str
	major: conint(ge=0) = 1
	minor: conint(ge=0) = 0
	patch: conint(ge=0) = 0

	@property
	def tag(self) -> str:
		return f"{self.branch}-v{self.major}.{self.minor}.{self.patch}"

	def bump(self, increment: IncrementKind) -> "Version":
		# Lower-order components are kept as-is, not reset to zero.
		return self.model_copy(update={increment: getattr(self, increment) + 1})

	def __str__(self) -> str:
		return self.tag


class CommitRecord(_FrozenModel):
	"""One commit from ``git log --pretty=format:'%h %H %s'``."""

	short_hash: str = Field(..., description="Abbreviated commit hash")
	full_hash: str = Field(..., description="Full commit hash")
	subject: str = Field("", description="First line of the commit message")


class ClassifiedCommit(CommitRecord):
	type: CommitType
	scope: str = NO_SCOPE
	description: str = ""


class ClassifiedLog(BaseModel):
	"""Classified commits grouped by scope, then by type, in first-seen order."""

	groups: Dict[str, Dict[str, List[ClassifiedCommit]]] = Field(default_factory=dict)

	def add(self, commit: ClassifiedCommit) -> None:
		by_type = self.groups.setdefault(commit.scope, {})
		by_type.setdefault(commit.type, []).append(commit)

	def unscoped(self) -> Dict[str, List[ClassifiedCommit]]:
		return self.groups.get(NO_SCOPE, {})

	def scoped(self) -> Dict[str, Dict[str, List[ClassifiedCommit]]]:
		return {scope: by_type for scope, by_type in self.groups.items() if scope != NO_SCOPE}

	def __len__(self) -> int:
		return sum(len(items) for by_type in self.groups.values() for items in by_type.values())


class ReleaseSettings(_FrozenModel):
	"""Explicit run context handed through the pipeline."""

	repo_path: str = "."
	changelog_path: str = "CHANGELOG.md"
	remote: str = "origin"
	baseline: str = "1.0.0"
	locale: str = "zh_TW"


class ReleaseResult(BaseModel):
	version: str
	previous_tag: Optional[str] = None
	entry: str
	changelog_path: str
	n_commits: int = 0
	changelog_written: bool = False
	committed: bool = False
	dry_run: bool = False
