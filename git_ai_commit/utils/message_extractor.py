"""
Commit message extraction and cleaning utilities.
"""

import re
from loguru import logger


TRUNCATION_MARKER = "..."

# Phrases models like to put in front of the actual message
PREAMBLE_PATTERNS = [
    # English
    r"(?:sure|okay|ok|certainly|of course)\s*[,!.]\s*",
    r"here(?:'s| is| are)\b[^:]{0,80}\b(?:commit|message)[^:]{0,40}:\s*",
    r"(?:(?:a|the|suggested|generated|proposed|concise|git)\s+)*commit(?:\s+message)?\s*:\s*",
    r"message\s*:\s*",
    # Russian
    r"вот\b[^:]{0,80}(?:сообщение|коммит)[^:]{0,40}:\s*",
    r"(?:сообщение\s+)?коммита?\s*:\s*",
]

# Leading/trailing artifacts: quotes, backticks, slashes
EDGE_ARTIFACTS = "\"'`“”‘’«»\\/"


class MessageExtractor:
    """Turn a raw model completion into a single-line commit message."""

    def __init__(self, character_limit: int = 102):
        """Initialize message extractor."""
        if character_limit <= len(TRUNCATION_MARKER):
            raise ValueError(f"character_limit must exceed {len(TRUNCATION_MARKER)}")
        self.character_limit = character_limit
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile regex patterns for efficient matching."""
        self.think_pattern = re.compile(r'<think>.*?(?:</think>|$)', re.DOTALL | re.IGNORECASE)
        self.fence_pattern = re.compile(r'```\w*')
        self.whitespace_pattern = re.compile(r'\s+')
        self.preamble_pattern = re.compile(
            r'^(?:' + '|'.join(PREAMBLE_PATTERNS) + r')',
            re.IGNORECASE
        )

    def extract_commit_message(self, raw_response: str) -> str:
        """Clean a model response, returning an empty string if nothing usable remains."""
        logger.debug(f"Extracting commit message from {len(raw_response)} char response")

        message = self._clean_response(raw_response)
        message = self._strip_preamble(message)
        message = self._truncate(message)

        logger.debug(f"Cleaned message: '{message}' (length: {len(message)})")
        return message

    def _clean_response(self, response: str) -> str:
        """Drop reasoning blocks and markdown, then collapse to one line."""
        cleaned = self.think_pattern.sub(' ', response)
        cleaned = self.fence_pattern.sub(' ', cleaned)
        return self.whitespace_pattern.sub(' ', cleaned).strip()

    def _strip_preamble(self, message: str) -> str:
        """Remove preambles and edge artifacts until the text stops changing."""
        previous = None
        while message != previous:
            previous = message
            message = message.strip().strip(EDGE_ARTIFACTS).strip()
            message = self.preamble_pattern.sub('', message, count=1)
        return message

    def _truncate(self, message: str) -> str:
        """Cut overlong messages to the limit, marker included."""
        if len(message) <= self.character_limit:
            return message
        keep = self.character_limit - len(TRUNCATION_MARKER)
        return message[:keep] + TRUNCATION_MARKER
