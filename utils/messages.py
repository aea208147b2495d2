#!/usr/bin/env python3
"""Operator-facing messages, per locale.

Traditional Chinese is the default; English is available through
``CHANGELOG_LOCALE=en``.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_LOCALE = "zh_TW"

MESSAGES: Dict[str, Dict[str, str]] = {
    "zh_TW": {
        "missing_branch": "請指定分支名稱。",
        "missing_increment": "請指定要遞增的版本號部分（major、minor、patch）。",
        "invalid_increment": "無效的命令，請指定 major、minor 或 patch。",
        "no_remote": "取得 Git URL 失敗",
        "write_failed": "填寫文件失敗：{changelog}（已繼續提交並建立標籤）",
        "git_failed": "Git 指令執行失敗：{error}",
        "done": "已更新 {changelog} 檔案、提交更改並建立標籤：{version}",
        "dry_run": "試跑模式：未寫入 {changelog}，亦未提交或建立標籤：{version}",
    },
    "en": {
        "missing_branch": "Please specify a branch name.",
        "missing_increment": "Please specify the version part to increment (major, minor, patch).",
        "invalid_increment": "Invalid increment, use major, minor or patch.",
        "no_remote": "Failed to get the Git remote URL",
        "write_failed": "Failed to write changelog {changelog}; continuing with commit and tag",
        "git_failed": "Git command failed: {error}",
        "done": "Updated {changelog}, committed changes and created tag: {version}",
        "dry_run": "Dry run: {changelog} not written, nothing committed or tagged: {version}",
    },
}


def message(key: str, locale: str = DEFAULT_LOCALE, **kw) -> str:
    """Return the message for ``key`` in ``locale``, formatted with ``kw``.

    Unknown locales fall back to the default one.
    """
    table = MESSAGES.get(locale) or MESSAGES[DEFAULT_LOCALE]
    template = table.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**kw) if kw else template
