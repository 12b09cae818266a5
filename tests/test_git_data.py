import datetime as dt

import pytest

from penumbra.git_data import (
    CommitData,
    FileCategories,
    GitError,
    categorize_files,
    group_by_date,
    is_config_file,
    is_doc_file,
    is_test_file,
)


def make_commit(hash_, when, message="work", insertions=0, deletions=0):
    return CommitData(
        hash=hash_,
        date=when,
        message=message,
        insertions=insertions,
        deletions=deletions,
    )


UTC = dt.timezone.utc


def test_lines_changed_sums_insertions_and_deletions():
    commit = make_commit("a", dt.datetime(2024, 1, 15, tzinfo=UTC), insertions=12, deletions=7)
    assert commit.lines_changed() == 12 + 7


def test_date_naive_uses_utc_day():
    commit = make_commit("a", dt.datetime(2024, 1, 15, 23, 30, tzinfo=UTC))
    assert commit.date_naive() == dt.date(2024, 1, 15)


def test_date_naive_converts_offset_to_utc():
    plus_two = dt.timezone(dt.timedelta(hours=2))
    commit = make_commit("a", dt.datetime(2024, 1, 16, 1, 0, tzinfo=plus_two))
    assert commit.date_naive() == dt.date(2024, 1, 15)


def test_group_by_date_orders_days_and_keeps_commit_order():
    c1 = make_commit("1", dt.datetime(2026, 2, 16, 9, tzinfo=UTC))
    c2 = make_commit("2", dt.datetime(2026, 2, 15, 10, tzinfo=UTC))
    c3 = make_commit("3", dt.datetime(2026, 2, 15, 14, tzinfo=UTC))
    grouped = group_by_date([c1, c2, c3])
    assert list(grouped) == [dt.date(2026, 2, 15), dt.date(2026, 2, 16)]
    assert [c.hash for c in grouped[dt.date(2026, 2, 15)]] == ["2", "3"]
    assert [c.hash for c in grouped[dt.date(2026, 2, 16)]] == ["1"]


def test_group_by_date_empty():
    assert group_by_date([]) == {}


def test_categorize_files_one_of_each():
    paths = ["tests/test_x.py", "Cargo.toml", "README.md", "src/main.rs"]
    assert categorize_files(paths) == FileCategories(
        test_files=1, config_files=1, doc_files=1, other_files=1
    )


def test_categorize_files_counts_every_path():
    paths = ["a.rs", "b.json", "notes.txt", "spec/x.rs", "c.yml", "d.py"]
    cats = categorize_files(paths)
    total = cats.test_files + cats.config_files + cats.doc_files + cats.other_files
    assert total == len(paths)


def test_categorize_files_is_case_insensitive():
    assert categorize_files(["SPEC/Foo.RS"]).test_files == 1
    assert categorize_files(["CONFIG.YAML"]).config_files == 1


def test_test_file_takes_precedence_over_config():
    cats = categorize_files(["test_config.json"])
    assert cats.test_files == 1
    assert cats.config_files == 0


def test_categorize_files_empty():
    assert categorize_files([]) == FileCategories()


@pytest.mark.parametrize("path", ["a.json", "a.toml", "a.yaml", "a.yml", "a.conf", "a.config"])
def test_is_config_file_true(path):
    assert is_config_file(path) is True


@pytest.mark.parametrize("path", ["main.rs", "json.rs", "readme.md"])
def test_is_config_file_false(path):
    assert is_config_file(path) is False


@pytest.mark.parametrize("path,expected", [("a.md", True), ("a.txt", True), ("a.rst", True), ("a.rs", False)])
def test_is_doc_file(path, expected):
    assert is_doc_file(path) is expected


@pytest.mark.parametrize(
    "path,expected",
    [("tests/a.rs", True), ("src/spec_helper.rb", True), ("src/contest.rs", True), ("src/lib.rs", False)],
)
def test_is_test_file(path, expected):
    assert is_test_file(path) is expected


def test_git_error_carries_message():
    err = GitError("No commits found in last 30 days")
    assert isinstance(err, Exception)
    assert str(err) == "No commits found in last 30 days"