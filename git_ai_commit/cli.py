"""
CLI interface using Typer with Rich integration.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from .config.settings import RunConfig, Settings
from .core import GitAICommit, RunResult, build_backend, check_backend
from .errors import BackendUnavailable, GenerationFailed, GitAICommitError
from .ui.console import AICommitConsole
from .utils.versioning import BumpType


app = typer.Typer(
    name="git-ai-commit",
    help="Commit with a message written by a local Ollama model, then bump the version tag",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=False
)

# Global console for error handling
console = Console()


def setup_logging(log_level: str = "WARNING", log_file: Optional[Path] = None):
    """Setup logging configuration."""
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=True
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="1 MB",
            retention="7 days"
        )


def load_settings(config_file: Optional[Path]) -> Settings:
    if config_file:
        return Settings.from_file(config_file)
    return Settings()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    model: Optional[str] = typer.Option(
        None, "--model", "-m",
        help="Ollama model (default: llama3:latest)"
    ),
    bump: Optional[BumpType] = typer.Option(
        None, "--bump", "-b",
        case_sensitive=False,
        help="Version bump after committing (default: patch)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n",
        help="Show the message and tag without committing, pushing or tagging"
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", "-l",
        help="Commit message language (default: english)"
    ),
    url: Optional[str] = typer.Option(
        None, "--url", "-u",
        help="Ollama server URL (default: http://127.0.0.1:11434)"
    ),
    repo_path: Optional[Path] = typer.Option(
        None, "--repo", "-r",
        help="Git repository path (default: current directory)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to configuration file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable verbose logging"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d",
        help="Enable debug logging (includes verbose)"
    ),
    version: bool = typer.Option(
        False, "--version",
        help="Show version information"
    )
):
    """
    Generate a commit message with a local model, commit, push and bump the tag.

    [bold blue]Examples:[/bold blue]

    [green]git-ai-commit[/green]                            # Basic usage
    [green]git-ai-commit --model llama2 --dry-run[/green]   # Try another model
    [green]git-ai-commit --bump minor[/green]               # Increment minor version
    [green]git-ai-commit --lang russian[/green]             # Message in Russian
    [green]git-ai-commit tag[/green]                        # Increment patch tag only
    [green]git-ai-commit tag major --dry-run[/green]        # Preview the next major tag
    """
    if version:
        from . import __version__
        console.print(f"[bold blue]Git AI Commit[/bold blue] version [green]{__version__}[/green]")
        return

    ctx.obj = {
        "model": model,
        "bump": bump,
        "dry_run": dry_run,
        "lang": lang,
        "url": url,
        "repo_path": repo_path,
        "config_file": config_file,
        "verbose": verbose,
        "debug": debug,
    }

    if ctx.invoked_subcommand is None:
        _execute(ctx.obj, tag_only=False)


@app.command()
def tag(
    ctx: typer.Context,
    bump: Optional[BumpType] = typer.Argument(
        None,
        case_sensitive=False,
        help="Which part of the version to increment (default: --bump, else patch)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n",
        help="Only show the tag that would be created"
    )
):
    """
    Work with tags only: bump the version tag without committing.

    [bold blue]Examples:[/bold blue]

    [green]git-ai-commit tag[/green]                  # v1.2.3 -> v1.2.4
    [green]git-ai-commit tag minor[/green]            # v1.2.3 -> v1.3.0
    [green]git-ai-commit tag major --dry-run[/green]  # Preview v2.0.0
    """
    options = dict(ctx.obj or {})
    options["bump"] = bump or options.get("bump")
    options["dry_run"] = dry_run or options.get("dry_run", False)
    _execute(options, tag_only=True)


@app.command()
def test(
    model: Optional[str] = typer.Option(
        None, "--model", "-m",
        help="Model to look for"
    ),
    url: Optional[str] = typer.Option(
        None, "--url", "-u",
        help="Ollama server URL"
    )
):
    """Check that the Ollama server is reachable and the model is loaded."""
    settings = Settings()
    config = RunConfig.from_settings(settings, model=model, api_url=url)
    backend = build_backend(config)
    ui = AICommitConsole(use_colors=settings.ui.use_colors)

    ui.show_ai_backend_info(backend.backend_type, backend.api_url, backend.model)
    try:
        asyncio.run(check_backend(backend))
    except BackendUnavailable as e:
        ui.print_error(str(e))
        raise typer.Exit(1)

    ui.print_success("AI backend is ready")


@app.command()
def config(
    show: bool = typer.Option(
        False, "--show", "-s",
        help="Show current configuration"
    ),
    api_url: Optional[str] = typer.Option(
        None, "--url", "-u",
        help="Set Ollama server URL"
    ),
    model: Optional[str] = typer.Option(
        None, "--model", "-m",
        help="Set model name"
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", "-l",
        help="Set commit message language"
    ),
    save: bool = typer.Option(
        False, "--save",
        help="Save configuration to file"
    )
):
    """
    Manage git-ai-commit configuration.

    [bold blue]Examples:[/bold blue]

    [green]git-ai-commit config --show[/green]                        # Show current config
    [green]git-ai-commit config --model qwen3:8b --save[/green]       # Change the default model
    """
    try:
        settings = Settings()

        if show:
            _show_configuration(settings)
            return

        config_changed = False

        if api_url:
            settings.ai.api_url = api_url
            config_changed = True
            console.print(f"[green]Set API URL to:[/green] {api_url}")

        if model:
            settings.ai.model = model
            config_changed = True
            console.print(f"[green]Set model to:[/green] {model}")

        if lang:
            settings.commit.language = lang
            config_changed = True
            console.print(f"[green]Set language to:[/green] {lang}")

        if save and config_changed:
            config_path = settings.config_dir / "config.json"
            settings.save_to_file(config_path)
            console.print(f"[green]Configuration saved to:[/green] {config_path}")
        elif config_changed:
            console.print("[yellow]Use --save to persist these changes[/yellow]")

        if not config_changed:
            console.print("[yellow]No configuration changes made[/yellow]")
            console.print("Use [green]--show[/green] to see current configuration")

    except (OSError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)


def _show_configuration(settings: Settings) -> None:
    """Show current configuration."""
    console.print("[bold blue]Git AI Commit Configuration[/bold blue]")
    console.print()

    console.print("[bold]AI Backend:[/bold]")
    console.print(f"  URL: {settings.ai.api_url}")
    console.print(f"  Model: {settings.ai.model}")
    console.print(f"  Timeout: {settings.ai.timeout}s")
    console.print()

    console.print("[bold]Commit Message:[/bold]")
    console.print(f"  Language: {settings.commit.language}")
    console.print(f"  Max length: {settings.commit.max_length}")
    console.print()

    console.print("[bold]Git:[/bold]")
    console.print(f"  Remote: {settings.git.remote}")
    console.print(f"  Default bump: {settings.git.bump.value}")
    console.print()


def _execute(options: dict, tag_only: bool) -> RunResult:
    """Build the run configuration, run, and map errors to exit codes."""
    try:
        settings = load_settings(options.get("config_file"))

        if options.get("debug"):
            log_level = "DEBUG"
        elif options.get("verbose"):
            log_level = "INFO"
        else:
            log_level = settings.ui.log_level
        setup_logging(log_level, settings.log_file)

        run_config = RunConfig.from_settings(
            settings,
            model=options.get("model"),
            bump=options.get("bump"),
            language=options.get("lang"),
            api_url=options.get("url"),
            dry_run=options.get("dry_run", False),
            tag_only=tag_only,
        )

        ui = AICommitConsole(use_colors=settings.ui.use_colors)
        app_engine = GitAICommit(run_config, options.get("repo_path"), console=ui)
        if not tag_only:
            ui.show_ai_backend_info(
                app_engine.ai_backend.backend_type,
                app_engine.ai_backend.api_url,
                app_engine.ai_backend.model
            )

        return asyncio.run(app_engine.run())

    except GenerationFailed as e:
        logger.error(f"Generation failed: {e}")
        AICommitConsole().show_generation_failure(str(e), e.body)
        raise typer.Exit(1)
    except GitAICommitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Unexpected error occurred")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def main():
    """Main entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
