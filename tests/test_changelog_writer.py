import logging
import os

import pytest

from utils.changelog_writer import prepend


def test_creates_missing_file(tmp_path):
    path = tmp_path / "CHANGELOG.md"
    assert prepend(str(path), "## [v2]\n\n") is True
    assert path.read_text(encoding="utf-8") == "## [v2]\n\n"


def test_prepends_newest_on_top(tmp_path):
    path = tmp_path / "CHANGELOG.md"
    path.write_text("## [v1]\n\n- old\n", encoding="utf-8")
    assert prepend(str(path), "## [v2]\n\n")
    assert path.read_text(encoding="utf-8") == "## [v2]\n\n## [v1]\n\n- old\n"
    assert not (tmp_path / "CHANGELOG.md.tmp").exists()


def test_write_failure_is_logged_not_raised(tmp_path, caplog):
    target = tmp_path / "CHANGELOG.md"
    target.mkdir()
    with caplog.at_level(logging.ERROR):
        assert prepend(str(target), "## [v2]\n\n") is False
    assert "Failed to write changelog" in caplog.text


def test_failed_replace_leaves_no_temp_file(tmp_path, monkeypatch):
    path = tmp_path / "CHANGELOG.md"
    path.write_text("## [v1]\n", encoding="utf-8")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    assert prepend(str(path), "## [v2]\n\n") is False
    assert sorted(p.name for p in tmp_path.iterdir()) == ["CHANGELOG.md"]
    assert path.read_text(encoding="utf-8") == "## [v1]\n"


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_symlinked_changelog_stays_a_link(tmp_path):
    real = tmp_path / "docs" / "CHANGELOG.md"
    real.parent.mkdir()
    real.write_text("## [v1]\n", encoding="utf-8")
    link = tmp_path / "CHANGELOG.md"
    link.symlink_to(real)

    assert prepend(str(link), "## [v2]\n\n")
    assert link.is_symlink()
    assert real.read_text(encoding="utf-8") == "## [v2]\n\n## [v1]\n"
