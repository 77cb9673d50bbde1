"""
Console interface with Rich components.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme


class AICommitConsole:
    """Console output for git-ai-commit."""

    def __init__(self, use_colors: bool = True, console: Optional[Console] = None):
        """Initialize console with optional colors."""
        self._setup_styles()
        if console is not None:
            console.push_theme(self.theme)
        self.console = console or Console(
            color_system="auto" if use_colors else None,
            theme=self.theme
        )

    def _setup_styles(self) -> None:
        """Setup custom styles for consistent theming."""
        self.styles = {
            "title": "bold blue",
            "success": "bold green",
            "warning": "bold yellow",
            "error": "bold red",
            "info": "blue",
            "muted": "dim",
            "tag": "bold magenta",
        }

        self.theme = Theme(self.styles)

    def show_ai_backend_info(self, backend_type: str, api_url: str, model: str) -> None:
        """Show AI backend information."""
        backend_panel = Panel(
            f"[bold]{backend_type.title()}[/bold] @ {api_url}\n"
            f"Model: [cyan]{model}[/cyan]",
            title="AI Backend",
            box=box.ROUNDED,
            style="blue"
        )
        self.console.print(backend_panel)

    def show_commit_message_preview(self, message: str) -> None:
        """Show the generated commit message."""
        self.console.print(
            Panel(Text(message), title="Generated Commit Message", box=box.ROUNDED, style="green")
        )

    def show_tag(self, tag: str, dry_run: bool = False) -> None:
        """Report the new (or would-be) tag."""
        if dry_run:
            self.console.print(f"[info]Dry run: new tag will be[/info] [tag]{tag}[/tag]")
        else:
            self.console.print(f"[success]New tag created:[/success] [tag]{tag}[/tag]")

    def show_generation_failure(self, error: str, body: str) -> None:
        """Show a failed generation together with the raw response body."""
        self.print_error(error)
        if body:
            self.console.print(Panel(Text(body), title="Response body", box=box.ROUNDED, style="red"))

    def show_progress_spinner(self, description: str):
        """Create a progress spinner context manager."""
        return self.console.status(f"[blue]{description}...[/blue]", spinner="dots")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[success]✓ {escape(message)}[/success]")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[warning]⚠ {escape(message)}[/warning]")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[error]✗ {escape(message)}[/error]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"[info]ℹ {escape(message)}[/info]")
