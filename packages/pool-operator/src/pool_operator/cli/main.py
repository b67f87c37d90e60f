"""pool-operator CLI - retrying stop/start/restart for named targets."""

import logging
import sys
from pathlib import Path

import typer
from rich.markup import escape

from pool_operator import __version__
from pool_operator.cli.batch import EXIT_USAGE, batch_app, console, load_settings
from pool_operator.cli.targets import targets_app

app = typer.Typer(
    name="pool-operator",
    help="Stop, start or restart app pools and services with retries",
    no_args_is_help=True,
)

# Add command groups
app.add_typer(batch_app, name="batch")
app.add_typer(targets_app, name="targets")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pool-operator {__version__}")
        raise typer.Exit()


@app.callback()
def configure(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (env: POOL_OPERATOR_LOG_LEVEL)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Configure logging before any command runs."""
    settings = load_settings()
    level = (log_level or settings.log_level).upper()
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"Unknown log level '{level}'", param_hint="--log-level")

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(numeric_level)
    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[stream_handler],
    )

    if settings.log_file is not None:
        try:
            attach_log_file(settings.log_file, numeric_level)
        except OSError as e:
            console.print(f"[red]Cannot open log file:[/red] {escape(str(e))}")
            raise typer.Exit(EXIT_USAGE)


def attach_log_file(path: Path, level: int) -> logging.Handler:
    """
    Send ``pool_operator`` records to a file, at INFO or below.

    Run events are logged at INFO, so the file always records them even
    when the terminal only shows warnings. A handler from an earlier
    invocation in the same process is replaced.

    Raises:
        OSError: If the file cannot be opened
    """
    handler = logging.FileHandler(path, encoding="utf-8")
    file_level = min(level, logging.INFO)
    handler.setLevel(file_level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )

    package_logger = logging.getLogger("pool_operator")
    for old in [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)]:
        package_logger.removeHandler(old)
        old.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(file_level)
    return handler


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
