"""
Prompt templates for commit message generation.

Templates are plain data; the builder only fills them in.
"""

from typing import Sequence

from ..git_ops.changes import ChangeFragment, sanitize_text


PRIMARY_TEMPLATE = """Write a concise git commit message (max {max_length} chars) in {language} for the change below.
Reply with the commit message only: no preamble, no quotes, no explanation.

Files: {files}
Change: {fragment}

Commit message:"""

FALLBACK_TEMPLATE = """Generate a short git commit message (under {target_length} characters) in {language} for: {fragment}"""

# Upper bound on file names listed in the primary prompt
MAX_LISTED_FILES = 10


class PromptBuilder:
    """Build the primary and fallback prompts for a change fragment."""

    def __init__(
        self,
        language: str = "english",
        max_length: int = 102,
        fallback_length: int = 50,
        fragment_lines: int = 5,
        fallback_lines: int = 3,
    ):
        self.language = language
        self.max_length = max_length
        self.fallback_length = fallback_length
        self.fragment_lines = fragment_lines
        self.fallback_lines = fallback_lines

    def build_primary_prompt(self, fragment: ChangeFragment) -> str:
        """Prompt for the first attempt, with the file list and a short excerpt."""
        return PRIMARY_TEMPLATE.format(
            max_length=self.max_length,
            language=self.language,
            files=self._format_files(fragment.files),
            fragment=fragment.reduce(self.fragment_lines),
        )

    def build_fallback_prompt(self, fragment: ChangeFragment) -> str:
        """Simpler prompt used once when the first attempt came back empty."""
        return FALLBACK_TEMPLATE.format(
            target_length=self.fallback_length,
            language=self.language,
            fragment=fragment.reduce(self.fallback_lines),
        )

    def _format_files(self, files: Sequence[str]) -> str:
        names = [sanitize_text(name, extra="/") for name in files[:MAX_LISTED_FILES]]
        names = [name for name in names if name]
        if not names:
            return "unknown"
        if len(files) > MAX_LISTED_FILES:
            names.append(f"and {len(files) - MAX_LISTED_FILES} more")
        return ", ".join(names)
