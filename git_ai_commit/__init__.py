"""
Git AI Commit - commit messages from a local model, plus semantic version tags.

Summarizes pending git changes, asks a local Ollama model for a commit
message, commits and pushes, then bumps the ``vMAJOR.MINOR.PATCH`` tag.
"""

__version__ = "1.0.0"

from git_ai_commit.core import GitAICommit
from git_ai_commit.config.settings import RunConfig, Settings

__all__ = ["GitAICommit", "RunConfig", "Settings"]
