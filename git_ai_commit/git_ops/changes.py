"""
Change summarization: pick what pending changes to describe and reduce
them to a short, payload-safe fragment.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from loguru import logger

from .repository import GitRepository


class ChangeSource(str, Enum):
    """Where a fragment's text came from, in priority order."""

    STAGED = "staged"
    UNSTAGED = "unstaged"
    UNTRACKED = "untracked"


def sanitize_text(text: str, extra: str = "") -> str:
    """Keep alphanumerics, spaces and ``._-`` (plus ``extra``); line breaks become spaces."""
    allowed = re.escape("._-" + extra)
    text = re.sub(rf'[^\w\s{allowed}]', '', text)
    return re.sub(r'\s+', ' ', text).strip()


@dataclass(frozen=True)
class ChangeFragment:
    """Text describing pending changes, plus the files it covers."""

    source: ChangeSource
    text: str
    files: Tuple[str, ...] = field(default_factory=tuple)

    def reduce(self, max_lines: int) -> str:
        """First ``max_lines`` lines, sanitized and joined with spaces."""
        head = self.text.splitlines()[:max_lines]
        return sanitize_text(' '.join(head))


class ChangeSummarizer:
    """Gather the change text to send to the model."""

    NEW_FILE_HEADER = "New file: {name}"

    def __init__(self, repository: GitRepository):
        self.repository = repository

    def summarize(self) -> Optional[ChangeFragment]:
        """Staged diff, else unstaged diff, else untracked file contents.

        Returns None when there is nothing to commit.
        """
        staged = self.repository.staged_diff()
        if staged.strip():
            logger.debug("Summarizing staged changes")
            return ChangeFragment(ChangeSource.STAGED, staged, tuple(self.repository.staged_files()))

        unstaged = self.repository.unstaged_diff()
        if unstaged.strip():
            logger.debug("Summarizing unstaged changes")
            return ChangeFragment(ChangeSource.UNSTAGED, unstaged, tuple(self.repository.unstaged_files()))

        untracked = self.repository.untracked_files()
        if untracked:
            logger.debug(f"Summarizing {len(untracked)} untracked files")
            return ChangeFragment(ChangeSource.UNTRACKED, self._new_files_text(untracked), tuple(untracked))

        logger.info("No staged, unstaged or untracked changes")
        return None

    def _new_files_text(self, names) -> str:
        parts = []
        for name in names:
            parts.append(self.NEW_FILE_HEADER.format(name=name))
            try:
                content = self.repository.read_file(name)
            except OSError as e:
                logger.warning(f"Could not read new file {name}: {e}")
                continue
            if content:
                parts.append(content.rstrip('\n'))
        return '\n'.join(parts)
