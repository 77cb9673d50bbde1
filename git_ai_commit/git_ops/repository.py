"""
Git repository operations with consistent error handling.
"""

from pathlib import Path
from typing import List, Optional

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from loguru import logger

from ..errors import GitAICommitError


class GitRepositoryError(GitAICommitError):
    """Raised when a git operation fails."""
    pass


class GitRepository:
    """Thin wrapper over GitPython for the operations the tool needs."""

    def __init__(self, repo_path: Optional[Path] = None):
        """Initialize Git repository."""
        self.repo_path = repo_path or Path.cwd()
        self.repo: Optional[Repo] = None
        self._initialize_repo()

    def _initialize_repo(self) -> None:
        """Initialize the Git repository object."""
        try:
            self.repo = Repo(self.repo_path, search_parent_directories=True)
            logger.debug(f"Initialized Git repository at {self.repo.working_dir}")
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise GitRepositoryError(f"Not a Git repository: {self.repo_path}")

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_dir)

    # Change inspection

    def staged_diff(self) -> str:
        """Diff of the index against HEAD."""
        return self._git("diff", "--cached")

    def staged_files(self) -> List[str]:
        return self._paths(self._git("diff", "--cached", "--name-only", "-z"))

    def unstaged_diff(self) -> str:
        """Diff of the working tree against the index."""
        return self._git("diff")

    def unstaged_files(self) -> List[str]:
        return self._paths(self._git("diff", "--name-only", "-z"))

    def untracked_files(self) -> List[str]:
        """Untracked files, honouring .gitignore and friends."""
        return self._paths(self._git("ls-files", "--others", "--exclude-standard", "-z"))

    def read_file(self, relative_path: str) -> str:
        """Read a working tree file as text, replacing undecodable bytes."""
        path = self.working_dir / relative_path
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    # Mutations

    def stage_all(self) -> None:
        """Stage every change, including deletions and new files."""
        self._git("add", "--all")
        logger.info("Staged all changes")

    def commit(self, message: str) -> str:
        """Create a commit with the given message."""
        self._git("commit", "-m", message)
        sha = self.repo.head.commit.hexsha
        logger.info(f"Created commit {sha[:8]}: {message}")
        return sha

    def push(self, remote: str = "origin", branch: Optional[str] = None) -> None:
        """Push the current branch, creating the upstream when missing."""
        try:
            if not branch:
                branch = self.repo.active_branch.name
        except TypeError as e:
            raise GitRepositoryError(f"Cannot push from a detached HEAD: {e}")

        remote_ref = f"{remote}/{branch}"
        if remote_ref not in [ref.name for ref in self.repo.refs]:
            self._git("push", "--set-upstream", remote, branch)
            logger.info(f"Created upstream branch {remote_ref}")
        else:
            self._git("push", remote, branch)
            logger.info(f"Pushed to {remote_ref}")

    # Tags

    def has_remote(self, remote: str = "origin") -> bool:
        return remote in [r.name for r in self.repo.remotes]

    def fetch_tags(self, remote: str = "origin") -> None:
        """Fetch remote tags so the next version does not collide."""
        if not self.has_remote(remote):
            logger.warning(f"Remote '{remote}' not configured, using local tags only")
            return
        self._git("fetch", remote, "--tags")
        logger.debug(f"Fetched tags from {remote}")

    def list_tags(self) -> List[str]:
        """All tags, highest version first."""
        return self._lines(self._git("tag", "--sort=-v:refname"))

    def create_tag(self, tag: str) -> None:
        """Create a lightweight tag on HEAD."""
        try:
            self.repo.create_tag(tag)
        except GitCommandError as e:
            raise GitRepositoryError(f"Failed to create tag {tag}: {e}")
        logger.info(f"Created tag {tag}")

    def push_tag(self, tag: str, remote: str = "origin") -> None:
        self._git("push", remote, tag)
        logger.info(f"Pushed tag {tag} to {remote}")

    # Helpers

    def _git(self, *args: str) -> str:
        try:
            return self.repo.git.execute(["git", *args])
        except GitCommandError as e:
            raise GitRepositoryError(f"git {args[0]} failed: {e.stderr.strip() if e.stderr else e}")

    @staticmethod
    def _lines(output: str) -> List[str]:
        return [line.strip() for line in output.splitlines() if line.strip()]

    @staticmethod
    def _paths(output: str) -> List[str]:
        """Split ``-z`` output; paths come back unquoted, exactly as on disk."""
        return [path for path in output.split('\0') if path]
