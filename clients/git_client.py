#!/usr/bin/env python3
from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Protocol

from configs.config import Config
from utils.errors import ReleaseError

logger = logging.getLogger(__name__)


class GitCommandError(ReleaseError):
	def __init__(self, message: str, code: str = "GIT_FAILED", args: Optional[List[str]] = None, stderr: str = "") -> None:
		super().__init__(message, code=code)
		self.git_args = list(args or [])
		self.stderr = stderr


class GitBackend(Protocol):
	"""Version-control primitives the release pipeline depends on."""

	def describe(self, match: Optional[str] = None) -> Optional[str]: ...

	def log(self, rev: str, pretty: str) -> str: ...

	def remote_url(self, name: str) -> Optional[str]: ...

	def add(self, path: str) -> None: ...

	def commit(self, message: str) -> None: ...

	def tag_annotated(self, name: str, message: str) -> None: ...


class GitClient:
	"""Runs the ``git`` binary against one repository, one blocking call at a time."""

	def __init__(self, repo_path: str = ".", binary: Optional[str] = None, timeout_s: Optional[int] = None) -> None:
		cfg = Config.get_git_config()
		self.repo_path = repo_path
		self.binary = binary or cfg.get("binary", Config.GIT_BINARY)
		self.timeout_s = int(timeout_s if timeout_s is not None else cfg.get("timeout_s", Config.GIT_TIMEOUT_S))

	def _run(self, args: List[str]) -> subprocess.CompletedProcess:
		cmd = [self.binary] + args
		logger.debug(f"git {' '.join(args)} (cwd={self.repo_path})")
		try:
			return subprocess.run(
				cmd,
				cwd=self.repo_path,
				capture_output=True,
				text=True,
				timeout=self.timeout_s,
				check=False,
			)
		except FileNotFoundError as e:
			raise GitCommandError(f"git executable not found: {self.binary}", code="GIT_MISSING", args=args) from e
		except subprocess.TimeoutExpired as e:
			raise GitCommandError(f"git {' '.join(args)} timed out after {self.timeout_s}s", code="TIMEOUT", args=args) from e

	def _check(self, args: List[str]) -> str:
		proc = self._run(args)
		if proc.returncode != 0:
			stderr = (proc.stderr or "").strip()
			raise GitCommandError(f"git {' '.join(args)} failed: {stderr}", args=args, stderr=stderr)
		return (proc.stdout or "").strip()

	# -------- Read-only --------
	def describe(self, match: Optional[str] = None) -> Optional[str]:
		"""Return the most recent tag reachable from HEAD, or None if there is none."""
		args = ["describe", "--tags", "--abbrev=0"]
		if match:
			args += ["--match", match]
		proc = self._run(args)
		if proc.returncode != 0:
			logger.debug(f"no tag found for match={match!r}: {(proc.stderr or '').strip()}")
			return None
		return (proc.stdout or "").strip() or None

	def log(self, rev: str, pretty: str) -> str:
		return self._check(["log", f"--pretty=format:{pretty}", rev])

	def remote_url(self, name: str) -> Optional[str]:
		proc = self._run(["remote", "get-url", name])
		if proc.returncode != 0:
			return None
		return (proc.stdout or "").strip() or None

	# -------- Mutations --------
	def add(self, path: str) -> None:
		self._check(["add", path])

	def commit(self, message: str) -> None:
		self._check(["commit", "-m", message])

	def tag_annotated(self, name: str, message: str) -> None:
		self._check(["tag", "-a", name, "-m", message])
