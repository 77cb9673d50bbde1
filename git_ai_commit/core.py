"""
Core engine that orchestrates summarizing, generating, committing and tagging.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger

from .ai_backends.base import AIBackend
from .ai_backends.ollama import OllamaBackend
from .config.settings import RunConfig
from .errors import BackendUnavailable
from .generator import MessageGenerator
from .git_ops.changes import ChangeSummarizer
from .git_ops.repository import GitRepository
from .ui.console import AICommitConsole
from .utils.message_extractor import MessageExtractor
from .utils.prompts import PromptBuilder
from .utils.versioning import next_tag


class RunOutcome(str, Enum):
    """How a run ended. Every outcome here maps to exit status 0."""

    COMMITTED = "committed"
    TAGGED = "tagged"
    DRY_RUN = "dry_run"
    NO_CHANGES = "no_changes"
    BACKEND_UNAVAILABLE = "backend_unavailable"


@dataclass
class RunResult:
    outcome: RunOutcome
    message: Optional[str] = None
    tag: Optional[str] = None
    commit_sha: Optional[str] = None


def build_backend(config: RunConfig) -> OllamaBackend:
    return OllamaBackend(
        api_url=config.api_url,
        model=config.model,
        timeout=config.timeout,
        probe_timeout=config.probe_timeout
    )


async def check_backend(backend: AIBackend) -> None:
    """Raise BackendUnavailable unless the server is up and has the model."""
    if not await backend.health_check():
        raise BackendUnavailable(f"Ollama server is not running at {backend.api_url}")

    if not await backend.has_model():
        raise BackendUnavailable(f"Model {backend.model} is not loaded in Ollama")


class GitAICommit:
    """Core git-ai-commit application engine."""

    def __init__(
        self,
        config: RunConfig,
        repo_path: Optional[Path] = None,
        repository: Optional[GitRepository] = None,
        backend: Optional[AIBackend] = None,
        console: Optional[AICommitConsole] = None,
    ):
        """Wire up the components for one run."""
        self.config = config
        self.git_repo = repository or GitRepository(repo_path)
        self.console = console or AICommitConsole()
        self.ai_backend = backend or build_backend(config)
        self.summarizer = ChangeSummarizer(self.git_repo)
        self.generator = MessageGenerator(
            self.ai_backend,
            PromptBuilder(
                language=config.language,
                max_length=config.max_length,
                fallback_length=config.fallback_length,
                fragment_lines=config.fragment_lines,
                fallback_lines=config.fallback_lines,
            ),
            MessageExtractor(character_limit=config.max_length),
        )

        logger.debug(f"git-ai-commit initialized with {config!r}")

    async def run(self) -> RunResult:
        """Run tag-only mode or the full commit workflow."""
        if self.config.tag_only:
            return self.run_tag_only()

        try:
            return await self.run_commit()
        except BackendUnavailable as e:
            logger.warning(str(e))
            self.console.print_warning(str(e))
            return RunResult(RunOutcome.BACKEND_UNAVAILABLE)

    async def run_commit(self) -> RunResult:
        """Generate a message, commit, push, then bump the version tag."""
        dry_run = self.config.dry_run
        logger.info(f"Running commit workflow (dry_run={dry_run})")

        await check_backend(self.ai_backend)

        fragment = self.summarizer.summarize()
        if fragment is None:
            self.console.print_info("No changes to commit")
            return RunResult(RunOutcome.NO_CHANGES)

        self.console.print_info(f"Sending request to model {self.config.model}...")
        with self.console.show_progress_spinner("Generating commit message"):
            message = await self.generator.generate(fragment)

        self.console.show_commit_message_preview(message)

        if dry_run:
            tag = self.compute_next_tag(fetch=False)
            self.console.print_info("Dry run: changes will not be committed and pushed")
            self.console.show_tag(tag, dry_run=True)
            return RunResult(RunOutcome.DRY_RUN, message=message, tag=tag)

        self.git_repo.stage_all()
        commit_sha = self.git_repo.commit(message)
        self.console.print_success(f"Created commit {commit_sha[:8]}")

        with self.console.show_progress_spinner("Pushing to remote"):
            self.git_repo.push(self.config.remote)

        tag = self.publish_next_tag()
        self.console.print_success("Commit and tag successfully created and pushed")
        return RunResult(RunOutcome.COMMITTED, message=message, tag=tag, commit_sha=commit_sha)

    def run_tag_only(self) -> RunResult:
        """Bump the version tag without touching the working tree."""
        logger.info(f"Running tag-only workflow (bump={self.config.bump.value}, dry_run={self.config.dry_run})")
        self.console.print_info("Working with tags only...")

        if self.config.dry_run:
            tag = self.compute_next_tag(fetch=False)
            self.console.show_tag(tag, dry_run=True)
            return RunResult(RunOutcome.DRY_RUN, tag=tag)

        tag = self.publish_next_tag()
        self.console.print_success("Tag successfully created and pushed")
        return RunResult(RunOutcome.TAGGED, tag=tag)

    def compute_next_tag(self, fetch: bool = True) -> str:
        """Next tag from the repository's tags, fetching remote ones first if asked."""
        if fetch:
            self.git_repo.fetch_tags(self.config.remote)
        return next_tag(self.git_repo.list_tags(), self.config.bump)

    def publish_next_tag(self) -> str:
        """Create the next tag and push it."""
        tag = self.compute_next_tag(fetch=True)
        self.git_repo.create_tag(tag)
        self.git_repo.push_tag(tag, self.config.remote)
        self.console.show_tag(tag)
        return tag
