#!/usr/bin/env python3
"""Changelog release agent.

Resolves the next ``<branch>-v<major>.<minor>.<patch>`` tag, harvests the
commits since the previous tag of that branch, renders them as a grouped
changelog entry, prepends it to the changelog file, then commits and tags.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, NoReturn, Optional

from clients.git_client import GitBackend, GitClient, GitCommandError
from configs.config import Config
from utils import changelog_writer
from utils.commit_classifier import classify_commits
from utils.errors import ReleaseError
from utils.markdown_renderer import render_entry
from utils.messages import message
from utils.release_committer import ReleaseCommitter
from utils.release_models import ReleaseResult, ReleaseSettings
from utils.repo_query import RemoteNotFoundError, RepoQuery
from utils.version_resolver import InvalidIncrementError, VersionResolver

# Set up logging
logger = logging.getLogger(__name__)


def load_settings(repo_path: Optional[str] = None, changelog_path: Optional[str] = None, remote: Optional[str] = None) -> ReleaseSettings:
	"""Build run settings from Config, with explicit overrides taking precedence."""
	cfg = Config.get_release_config()
	if repo_path:
		cfg["repo_path"] = repo_path
	if changelog_path:
		cfg["changelog_path"] = changelog_path
	if remote:
		cfg["remote"] = remote
	return ReleaseSettings(**cfg)


class ChangelogAgent:
	"""Agent running one changelog release against one repository."""

	def __init__(self, settings: ReleaseSettings, git: Optional[GitBackend] = None):
		"""Initialize the changelog agent.

		Args:
			settings: Repository path, changelog file, remote and baseline
			git: Optional git backend. If None, a GitClient on settings.repo_path is used.
		"""
		self.settings = settings
		self.git = git if git is not None else GitClient(settings.repo_path)
		self.query = RepoQuery(self.git, remote=settings.remote)
		self.resolver = VersionResolver(self.query, baseline=settings.baseline)
		self.committer = ReleaseCommitter(self.git, changelog_path=settings.changelog_path)
		logger.info("Changelog agent initialized")

	@property
	def changelog_file(self) -> str:
		path = self.settings.changelog_path
		if os.path.isabs(path):
			return path
		return os.path.join(self.settings.repo_path, path)

	def run(self, branch: str, increment: str, dry_run: bool = False) -> ReleaseResult:
		"""Resolve, render, write, commit and tag.

		Args:
			branch: Branch name, also the tag prefix
			increment: major, minor or patch (case-insensitive)
			dry_run: Render only; no file write, commit or tag

		Returns:
			ReleaseResult describing what was done

		Raises:
			InvalidIncrementError: Before any repository access
			RemoteNotFoundError: Before the changelog is touched
			GitCommandError: If a git command fails
		"""
		version, branch_tag = self.resolver.resolve(branch, increment)
		repo_url = self.query.remote_url()

		commits = self.query.log_range(branch_tag, branch)
		classified = classify_commits(commits)
		logger.info(f"Classified {len(classified)} of {len(commits)} commits")

		previous_tag = self.query.latest_tag()
		entry = render_entry(version.tag, classified, repo_url, previous_tag)

		result = ReleaseResult(
			version=version.tag,
			previous_tag=previous_tag,
			entry=entry,
			changelog_path=self.changelog_file,
			n_commits=len(classified),
			dry_run=dry_run,
		)
		if dry_run:
			return result

		result.changelog_written = changelog_writer.prepend(self.changelog_file, entry)
		self.committer.commit_and_tag(version.tag)
		result.committed = True
		return result


class ReleaseArgumentParser(argparse.ArgumentParser):
	"""Argument parser whose usage errors exit with status 1."""

	def error(self, message: str) -> NoReturn:
		self.print_usage(sys.stderr)
		self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ReleaseArgumentParser:
	parser = ReleaseArgumentParser(
		prog="changelog-release",
		description="Changelog Release - Bump the branch version, prepend a changelog entry, commit and tag",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  changelog-release release patch
  changelog-release main minor --repo ../service --dry-run
  python -m agents.changelog_agent release major --json
		"""
	)
	parser.add_argument("branch", nargs="?", help="Branch name; also the tag prefix (<branch>-v*)")
	parser.add_argument("increment", nargs="?", help="Version part to increment: major, minor or patch")
	parser.add_argument("--repo", default=None, help="Repository path (default: current directory)")
	parser.add_argument("--changelog", default=None, help="Changelog file relative to the repository")
	parser.add_argument("--remote", default=None, help="Remote used for links (default: origin)")
	parser.add_argument("--dry-run", action="store_true", help="Print the entry without writing, committing or tagging")
	parser.add_argument("--json", action="store_true", help="Output the result as JSON")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
	return parser


def _fail(key: str, locale: str, **kw) -> NoReturn:
	print(f"Error: {message(key, locale, **kw)}", file=sys.stderr)
	sys.exit(1)


def main(argv: Optional[List[str]] = None):
	"""CLI entry point for the changelog release agent."""
	parser = build_parser()
	args = parser.parse_args(argv)

	# Set up logging
	log_level = logging.DEBUG if args.verbose else Config.LOG_LEVEL
	logging.basicConfig(
		level=log_level,
		format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
	)

	settings = load_settings(args.repo or os.getcwd(), args.changelog, args.remote)
	locale = settings.locale

	if not args.branch:
		_fail("missing_branch", locale)
	if not args.increment:
		_fail("missing_increment", locale)

	try:
		agent = ChangelogAgent(settings)
		result = agent.run(args.branch, args.increment, dry_run=args.dry_run)
	except InvalidIncrementError:
		_fail("invalid_increment", locale)
	except RemoteNotFoundError:
		_fail("no_remote", locale)
	except GitCommandError as e:
		_fail("git_failed", locale, error=str(e))
	except ReleaseError as e:
		print(f"Error: {e}", file=sys.stderr)
		sys.exit(1)
	except KeyboardInterrupt:
		print("\nOperation cancelled by user", file=sys.stderr)
		sys.exit(1)
	except Exception as e:
		print(f"Unexpected error: {e}", file=sys.stderr)
		if args.verbose:
			logger.exception("Detailed error information:")
		else:
			print("Use --verbose for more details", file=sys.stderr)
		sys.exit(1)

	changelog_name = settings.changelog_path
	if not result.dry_run and not result.changelog_written:
		print(f"Error: {message('write_failed', locale, changelog=result.changelog_path)}", file=sys.stderr)

	if args.json:
		print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
	elif result.dry_run:
		print(result.entry)
		print(message("dry_run", locale, changelog=changelog_name, version=result.version))
	else:
		print(message("done", locale, changelog=changelog_name, version=result.version))
	sys.exit(0)


if __name__ == "__main__":
	main()
