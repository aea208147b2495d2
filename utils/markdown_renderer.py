#!/usr/bin/env python3
from __future__ import annotations

from typing import Dict, List, Optional

from utils.release_models import ClassifiedCommit, ClassifiedLog


def commit_url(repo_url: str, full_hash: str) -> str:
	return f"{repo_url}/commit/{full_hash}"


def compare_url(repo_url: str, version: str, previous_tag: Optional[str]) -> str:
	if previous_tag:
		return f"{repo_url}/compare/{previous_tag}...{version}"
	return f"{repo_url}/releases/tag/{version}"


def bullets(items: List[ClassifiedCommit], repo_url: str) -> str:
	return "\n".join(
		f"  - {it.description}([{it.short_hash}]({commit_url(repo_url, it.full_hash)}))"
		for it in items or []
	)


def _type_groups(by_type: Dict[str, List[ClassifiedCommit]], repo_url: str, heading: str) -> str:
	out = ""
	for commit_type, items in by_type.items():
		out += heading.format(type=commit_type)
		out += bullets(items, repo_url) + "\n\n"
	return out


def render_entry(version: str, log: ClassifiedLog, repo_url: str, previous_tag: Optional[str] = None) -> str:
	"""Render one changelog entry.

	Unscoped commits come first as ``### <type>`` groups; scoped commits follow
	as ``### <scope>`` with a ``- <type>`` list per type. Groups keep the order
	in which they were first seen.
	"""
	md = f"## [{version}]({compare_url(repo_url, version, previous_tag)})\n\n"
	md += _type_groups(log.unscoped(), repo_url, "### {type}\n\n")
	for scope, by_type in log.scoped().items():
		md += f"### {scope}\n"
		md += _type_groups(by_type, repo_url, "- {type}\n\n")
	return md
