"""Terminal output for the meetscribe command using the Rich library.

Operator-facing messages (startup banner, configuration warnings) go through
OutputHandler; request logs go through the logging module.
"""

from typing import List

from rich.console import Console

from ..config import Settings


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Server started")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print(self, message: str) -> None:
        self.console.print(message)

    def print_startup_banner(self, settings: Settings, host: str, port: int) -> List[str]:
        """Display where the server listens and which integrations are configured.

        Args:
            settings: Loaded application settings
            host: Interface the server binds to
            port: Port the server listens on

        Returns:
            Warnings that were displayed
        """
        prefix = settings.server.api_prefix.rstrip('/')
        self.console.print(f"\n[bold]meetscribe[/bold] listening on http://{host}:{port}")
        self.console.print(f"  API root:     http://{host}:{port}{prefix}")
        self.console.print(f"  Frontend URL: {settings.server.frontend_url}")

        warnings = []
        if not settings.openai.api_key:
            warnings.append("OPENAI_API_KEY is not set; audio transcription will fail")
        missing = settings.confluence.missing_variables()
        if missing:
            warnings.append(f"Confluence publishing is disabled, missing: {', '.join(missing)}")

        if not warnings:
            self.success("OpenAI and Confluence are configured")
        for warning in warnings:
            self.warning(warning)
        return warnings
