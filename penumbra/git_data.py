"""Commit records taken from repository history, and helpers to sort them."""

from __future__ import annotations

import datetime as dt
import os
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

_CONFIG_SUFFIXES = (".json", ".toml", ".yaml", ".yml", ".conf", ".config")
_DOC_SUFFIXES = (".md", ".txt", ".rst")


class GitError(Exception):
    """Raised when repository history cannot be read or holds no commits."""


@dataclass
class FileCategories:
    """Counts of the files a commit touched, by kind."""

    test_files: int = 0
    config_files: int = 0
    doc_files: int = 0
    other_files: int = 0


@dataclass
class CommitStats:
    """Line and file totals of a commit diff."""

    insertions: int = 0
    deletions: int = 0
    files_changed: int = 0


@dataclass
class CommitData:
    """Data extracted from a single commit."""

    hash: str
    date: dt.datetime
    message: str
    insertions: int = 0
    deletions: int = 0
    files_changed: int = 0
    author: str = "unknown"
    is_merge: bool = False
    file_categories: FileCategories = field(default_factory=FileCategories)

    def lines_changed(self) -> int:
        """Total lines changed: insertions plus deletions."""
        return self.insertions + self.deletions

    def date_naive(self) -> dt.date:
        """The calendar day of the commit, in UTC."""
        moment = self.date
        if moment.tzinfo is not None:
            moment = moment.astimezone(dt.timezone.utc)
        return moment.date()


def group_by_date(commits: Iterable[CommitData]) -> dict[dt.date, list[CommitData]]:
    """Group commits by day, days in ascending order, commits in given order."""
    grouped: defaultdict[dt.date, list[CommitData]] = defaultdict(list)
    for commit in commits:
        grouped[commit.date_naive()].append(commit)
    return dict(sorted(grouped.items()))


def categorize_files(paths: Iterable[str | os.PathLike[str]]) -> FileCategories:
    """Count changed file paths as test, config, doc or other files."""
    categories = FileCategories()
    for path in paths:
        lowered = os.fspath(path).lower()
        if is_test_file(lowered):
            categories.test_files += 1
        elif is_config_file(lowered):
            categories.config_files += 1
        elif is_doc_file(lowered):
            categories.doc_files += 1
        else:
            categories.other_files += 1
    return categories


def is_test_file(path: str) -> bool:
    """Whether a lower-cased path names a test file."""
    return "test" in path or "spec" in path or path.startswith("tests/")


def is_config_file(path: str) -> bool:
    """Whether a lower-cased path names a configuration file."""
    return path.endswith(_CONFIG_SUFFIXES)


def is_doc_file(path: str) -> bool:
    """Whether a lower-cased path names a documentation file."""
    return path.endswith(_DOC_SUFFIXES)