"""Tests for git_ai_commit.git_ops.changes module."""

import pytest

from conftest import FakeRepository
from git_ai_commit.git_ops.changes import (
    ChangeFragment,
    ChangeSource,
    ChangeSummarizer,
    sanitize_text,
)


class TestSanitizeText:
    """Tests for sanitize_text."""

    def test_strips_quotes_and_control_characters(self):
        raw = 'print("hi")\x00\x1b[0m {"key": \'value\'}\\'
        assert sanitize_text(raw) == "printhi0m key value"

    def test_keeps_safe_punctuation(self):
        assert sanitize_text("file_name-v2.py") == "file_name-v2.py"

    def test_newlines_become_spaces(self):
        assert sanitize_text("one\ntwo\r\nthree\tfour") == "one two three four"

    def test_extra_characters(self):
        assert sanitize_text("src/app/main.py", extra="/") == "src/app/main.py"
        assert sanitize_text("src/app/main.py") == "srcappmain.py"

    def test_keeps_non_ascii_letters(self):
        assert sanitize_text("Привет, мир!") == "Привет мир"


class TestChangeFragment:
    """Tests for ChangeFragment.reduce."""

    def test_reduce_keeps_first_lines(self):
        fragment = ChangeFragment(ChangeSource.STAGED, "l1\nl2\nl3\nl4\nl5\nl6")
        assert fragment.reduce(3) == "l1 l2 l3"
        assert fragment.reduce(5) == "l1 l2 l3 l4 l5"

    def test_reduce_sanitizes(self):
        fragment = ChangeFragment(ChangeSource.UNSTAGED, 'diff --git a/x b/x\n+"quoted"')
        assert fragment.reduce(5) == "diff --git ax bx quoted"

    def test_is_frozen(self):
        fragment = ChangeFragment(ChangeSource.STAGED, "text")
        with pytest.raises(Exception):
            fragment.text = "other"


class TestChangeSummarizer:
    """Source selection in priority order."""

    def test_staged_first(self):
        repo = FakeRepository(staged="staged diff", unstaged="unstaged diff", untracked={"a.txt": "a"})
        fragment = ChangeSummarizer(repo).summarize()
        assert fragment.source is ChangeSource.STAGED
        assert fragment.text == "staged diff"
        assert fragment.files == ("staged.py",)

    def test_unstaged_when_nothing_staged(self):
        repo = FakeRepository(unstaged="unstaged diff", untracked={"a.txt": "a"})
        fragment = ChangeSummarizer(repo).summarize()
        assert fragment.source is ChangeSource.UNSTAGED
        assert fragment.text == "unstaged diff"

    def test_untracked_files_concatenated(self):
        repo = FakeRepository(untracked={"a.txt": "alpha\n", "dir/b.py": "print(1)\n"})
        fragment = ChangeSummarizer(repo).summarize()
        assert fragment.source is ChangeSource.UNTRACKED
        assert fragment.text == "New file: a.txt\nalpha\nNew file: dir/b.py\nprint(1)"
        assert fragment.files == ("a.txt", "dir/b.py")

    def test_unreadable_untracked_file_keeps_header(self):
        repo = FakeRepository(untracked={"gone.txt": OSError("vanished"), "b.txt": "beta"})
        fragment = ChangeSummarizer(repo).summarize()
        assert fragment.text == "New file: gone.txt\nNew file: b.txt\nbeta"

    def test_whitespace_only_diff_counts_as_empty(self):
        repo = FakeRepository(staged="\n  \n", unstaged="real change")
        assert ChangeSummarizer(repo).summarize().source is ChangeSource.UNSTAGED

    def test_no_changes(self):
        assert ChangeSummarizer(FakeRepository()).summarize() is None
