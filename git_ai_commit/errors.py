"""
Exception hierarchy shared by all components.
"""

from typing import Optional


class GitAICommitError(Exception):
    """Base exception for git-ai-commit operations."""
    pass


class BackendUnavailable(GitAICommitError):
    """The inference endpoint is unreachable or the model is not loaded.

    Treated as an expected condition: reported, exit status 0.
    """
    pass


class GenerationFailed(GitAICommitError):
    """Neither the primary nor the fallback attempt produced a message."""

    def __init__(self, message: str, body: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.body = body
        self.status = status
