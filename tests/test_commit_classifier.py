from utils.commit_classifier import classify_commit, classify_commits
from utils.release_models import NO_SCOPE, CommitRecord
from utils.repo_query import parse_log
from tests.conftest import SAMPLE_LOG


def _commit(subject, h="a1"):
    return CommitRecord(short_hash=h, full_hash=h + "full", subject=subject)


def test_scoped_feature():
    c = classify_commit(_commit("feat(api): add health check"))
    assert c.type == "feat"
    assert c.scope == "api"
    assert c.description == "add health check"


def test_unmatched_subject_is_dropped():
    assert classify_commit(_commit("random text")) is None
    log = classify_commits([_commit("random text")])
    assert len(log) == 0
    assert log.groups == {}


def test_missing_scope_uses_sentinel():
    c = classify_commit(_commit("  fix: handle empty body"))
    assert c.scope == NO_SCOPE
    assert c.description == "handle empty body"


def test_chore_and_unknown_types_are_not_harvested():
    assert classify_commit(_commit("chore: changelog for version main-v1.0.1")) is None
    assert classify_commit(_commit("build: bump deps")) is None
    assert classify_commit(_commit("feature: not a keyword")) is None


def test_all_recognized_types():
    for t in ("feat", "fix", "docs", "style", "refactor", "test", "perf"):
        assert classify_commit(_commit(f"{t}: something")).type == t


def test_grouping_preserves_first_seen_order():
    log = classify_commits(parse_log(SAMPLE_LOG))
    assert list(log.groups) == [NO_SCOPE, "api"]
    assert list(log.unscoped()) == ["feat", "docs"]
    assert [c.short_hash for c in log.unscoped()["feat"]] == ["a1", "f6"]
    assert list(log.scoped()["api"]) == ["fix", "feat"]
    assert len(log) == 5


def test_classification_is_pure():
    commits = parse_log(SAMPLE_LOG)
    first = classify_commits(commits)
    second = classify_commits(commits)
    assert first == second
    assert first.model_dump() == second.model_dump()
