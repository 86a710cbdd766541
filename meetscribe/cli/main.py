"""Main CLI entry point for the meetscribe command.

Loads settings from the environment (and ``.env``), configures logging and
serves the Flask backend.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from meetscribe import __version__
from meetscribe.cli.models import ExitCode
from meetscribe.cli.output import OutputHandler
from meetscribe.config import SettingsLoader
from meetscribe.errors import ConfigurationError
from meetscribe.web import create_app

app = typer.Typer(
    name="meetscribe",
    help="""Meeting transcription backend: audio to minutes, minutes to Confluence.

QUICK START:
  meetscribe                       # Serve on 0.0.0.0:$PORT (default 3001)
  meetscribe --port 8080 -v 1      # Custom port, request logging
  meetscribe --logdir ./logs       # Also write a timestamped log file""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'meetscribe' namespace logger; the root logger and
    third-party loggers are left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("meetscribe")
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"meetscribe_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    host: str = typer.Option(
        "0.0.0.0",
        "--host",
        help="Interface to bind to",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        help="Port to listen on (default: $PORT or 3001)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=warnings, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Serve the meeting transcription backend."""
    if version:
        typer.echo(f"meetscribe version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        settings = SettingsLoader().load()
    except ConfigurationError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    listen_port = port if port is not None else settings.server.port
    flask_app = create_app(settings)
    output.print_startup_banner(settings, host, listen_port)

    try:
        flask_app.run(host=host, port=listen_port)
    except OSError as e:
        output.error(f"Could not start server on {host}:{listen_port}: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
