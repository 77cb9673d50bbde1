"""
Configuration management with Pydantic validation and environment variable support.
"""

import json
import os
import platform
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

from ..utils.versioning import BumpType


class AISettings(BaseModel):
    """Local inference endpoint configuration."""

    api_url: str = Field(
        default="http://127.0.0.1:11434",
        description="Ollama server endpoint"
    )
    model: str = Field(
        default="llama3:latest",
        description="Model used to write commit messages"
    )
    timeout: int = Field(
        default=120,
        ge=10,
        le=600,
        description="Generation request timeout in seconds"
    )
    probe_timeout: float = Field(
        default=1.0,
        gt=0,
        le=30,
        description="Connect timeout for the liveness probe"
    )


class CommitSettings(BaseModel):
    """Commit message generation configuration."""

    language: str = Field(
        default="english",
        description="Language of the generated message"
    )
    max_length: int = Field(
        default=102,
        ge=20,
        le=300,
        description="Maximum commit message length"
    )
    fallback_length: int = Field(
        default=50,
        ge=10,
        le=300,
        description="Target length asked for by the fallback prompt"
    )
    fragment_lines: int = Field(
        default=5,
        ge=1,
        le=200,
        description="Diff lines sent with the primary prompt"
    )
    fallback_lines: int = Field(
        default=3,
        ge=1,
        le=200,
        description="Diff lines sent with the fallback prompt"
    )


class GitSettings(BaseModel):
    """Git operation configuration."""

    remote: str = Field(
        default="origin",
        description="Remote that receives commits and tags"
    )
    bump: BumpType = Field(
        default=BumpType.PATCH,
        description="Default version bump after a commit"
    )


class UISettings(BaseModel):
    """User interface configuration."""

    use_colors: bool = Field(
        default=True,
        description="Use colored output"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Console logging level"
    )


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    ai: AISettings = Field(default_factory=AISettings)
    commit: CommitSettings = Field(default_factory=CommitSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    ui: UISettings = Field(default_factory=UISettings)

    model_config = {
        "env_prefix": "GAC_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }

    def __init__(self, **kwargs):
        # Fall back to the user config file when nothing was passed explicitly
        if not kwargs:
            config_path = default_config_path()
            if config_path.exists():
                try:
                    with open(config_path) as f:
                        kwargs = json.load(f)
                except (json.JSONDecodeError, OSError):
                    pass

        # Ollama's own variables are honoured as shortcuts
        if os.getenv("OLLAMA_HOST"):
            kwargs.setdefault("ai", {})
            kwargs["ai"]["api_url"] = _normalize_host(os.environ["OLLAMA_HOST"])

        if os.getenv("OLLAMA_MODEL"):
            kwargs.setdefault("ai", {})
            kwargs["ai"]["model"] = os.environ["OLLAMA_MODEL"]

        super().__init__(**kwargs)

    @classmethod
    def from_file(cls, config_path: Path) -> "Settings":
        """Load settings from a configuration file."""
        if config_path.exists():
            with open(config_path) as f:
                config_data = json.load(f)
            return cls(**config_data)
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save current settings to a configuration file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory."""
        return default_config_path().parent

    @property
    def cache_dir(self) -> Path:
        """Get the cache directory."""
        if platform.system() == "Windows":
            base = Path(os.environ.get("LOCALAPPDATA", "~"))
        else:
            base = Path(os.environ.get("XDG_CACHE_HOME", "~/.cache"))

        return (base / "git-ai-commit").expanduser()

    @property
    def log_file(self) -> Path:
        """Get the log file path."""
        return self.cache_dir / "git-ai-commit.log"


class RunConfig(BaseModel):
    """Immutable options for a single invocation.

    Built once from ``Settings`` plus command line overrides and handed to
    every component, so nothing reads global state mid-run.
    """

    model_config = ConfigDict(frozen=True)

    api_url: str
    model: str
    language: str
    bump: BumpType
    remote: str
    dry_run: bool = False
    tag_only: bool = False
    timeout: int = 120
    probe_timeout: float = 1.0
    max_length: int = 102
    fallback_length: int = 50
    fragment_lines: int = 5
    fallback_lines: int = 3

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        model: Optional[str] = None,
        bump: Optional[BumpType] = None,
        language: Optional[str] = None,
        api_url: Optional[str] = None,
        dry_run: bool = False,
        tag_only: bool = False,
    ) -> "RunConfig":
        """Merge command line overrides on top of loaded settings."""
        return cls(
            api_url=(api_url or settings.ai.api_url).rstrip('/'),
            model=model or settings.ai.model,
            language=language or settings.commit.language,
            bump=bump or settings.git.bump,
            remote=settings.git.remote,
            dry_run=dry_run,
            tag_only=tag_only,
            timeout=settings.ai.timeout,
            probe_timeout=settings.ai.probe_timeout,
            max_length=settings.commit.max_length,
            fallback_length=settings.commit.fallback_length,
            fragment_lines=settings.commit.fragment_lines,
            fallback_lines=settings.commit.fallback_lines,
        )


def default_config_path() -> Path:
    """Get the default config file path."""
    if platform.system() == "Windows":
        base = Path(os.environ.get("APPDATA", "~"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config"))

    return (base / "git-ai-commit" / "config.json").expanduser()


def _normalize_host(host: str) -> str:
    """Turn an OLLAMA_HOST value such as ``0.0.0.0:11434`` into a URL."""
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip('/')
