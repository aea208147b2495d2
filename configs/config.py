import os
from typing import Dict, Any

from dotenv import load_dotenv

load_dotenv()


class Config:
	"""Configuration for the changelog release agent."""

	# Changelog file, relative to the repository root
	CHANGELOG_PATH = os.getenv("CHANGELOG_PATH", "CHANGELOG.md")
	CHANGELOG_REMOTE = os.getenv("CHANGELOG_REMOTE", "origin")
	CHANGELOG_BASELINE = os.getenv("CHANGELOG_BASELINE", "1.0.0")

	# Operator messages
	CHANGELOG_LOCALE = os.getenv("CHANGELOG_LOCALE", "zh_TW")

	# Git subprocess behavior
	GIT_BINARY = os.getenv("GIT_BINARY", "git")
	GIT_TIMEOUT_S = int(os.getenv("GIT_TIMEOUT_S", "60"))

	# Logging
	LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

	@classmethod
	def get_git_config(cls) -> Dict[str, Any]:
		"""Get git client configuration."""
		return {
			"binary": cls.GIT_BINARY,
			"timeout_s": cls.GIT_TIMEOUT_S,
		}

	@classmethod
	def get_release_config(cls) -> Dict[str, Any]:
		"""Get release pipeline configuration.

		Returns:
			Mapping with changelog path, remote name, baseline version and locale.
		"""
		return {
			"changelog_path": cls.CHANGELOG_PATH,
			"remote": cls.CHANGELOG_REMOTE,
			"baseline": cls.CHANGELOG_BASELINE,
			"locale": cls.CHANGELOG_LOCALE,
		}
