"""
Command-line interface for pkginventory.

This module provides the command-line entry point that detects the host's
package-manager family and prints every installed package as a JSON line.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pkginventory import __version__
from pkginventory.config import InventoryConfig
from pkginventory.dispatch import list_packages, lister_for_family
from pkginventory.errors import PackageInventoryError, UnsupportedPlatformError
from pkginventory.output import format_packages
from pkginventory.platform import detect_os_family

# Standard output carries the package records, so logs go to stderr
console = Console(stderr=True)
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger("pkginventory")

app = typer.Typer(
    help="List the software packages installed on this host as JSON lines.",
    add_completion=False,
)


def log_error(message: str) -> None:
    """Log an error message to both logger and console."""
    logger.error(message)
    console.print(f"[red]{message}[/red]")
    return None


def resolve_family(config: InventoryConfig, family: Optional[str]) -> str:
    """
    Pick the OS family to list packages for.

    The order of precedence is:
    1. Command-line argument
    2. PKGINVENTORY_FAMILY env var or the config file
    3. Detection from the running host
    """
    if family:
        return family.lower()
    if config.os_family:
        logger.debug(f"Using configured OS family: {config.os_family}")
        return config.os_family
    return detect_os_family(config.os_release_path)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output."
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Output logs in JSON format."
    ),
    version: bool = typer.Option(
        False, "--version", help="Show the application version and exit."
    ),
) -> None:
    """
    pkginventory: one JSON line per installed package.
    """
    if version:
        typer.echo(f"pkginventory version: {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    # Configure logging level based on verbosity
    if verbose:
        logger.setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    # Configure JSON logging if requested
    if json_logs:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        logging.basicConfig(
            level=logging.INFO if not verbose else logging.DEBUG,
            format='{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"message": "%(message)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S",
            stream=sys.stderr,
        )
        logger.debug("JSON logging enabled")


@app.command(name="list")
def list_command(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to the config file. Defaults to "
            "~/.config/pkginventory/config.yaml.",
        ),
    ] = None,
    family: Annotated[
        Optional[str],
        typer.Option(
            "--family",
            "-f",
            help="OS family (redhat, debian, darwin). Detected if not specified. "
            "Uses PKGINVENTORY_FAMILY env var if set.",
        ),
    ] = None,
    rpm_binary: Annotated[
        Optional[str],
        typer.Option("--rpm-binary", help="Path to the rpm binary."),
    ] = None,
    status_file: Annotated[
        Optional[Path],
        typer.Option("--status-file", help="Path to the dpkg status file."),
    ] = None,
    cellar: Annotated[
        Optional[Path],
        typer.Option("--cellar", help="Path to the Homebrew cellar."),
    ] = None,
) -> None:
    """
    Print every installed package as one JSON object per line.
    """
    config = InventoryConfig.load(config_path)
    if rpm_binary:
        config.rpm_binary = rpm_binary
    if status_file:
        config.dpkg_status_path = status_file
    if cellar:
        config.cellar_path = cellar

    try:
        os_family = resolve_family(config, family)
        packages = list_packages(os_family, config)
    except PackageInventoryError as e:
        log_error(str(e))
        raise typer.Exit(1) from e

    for line in format_packages(packages):
        typer.echo(line)


@app.command()
def detect(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to the config file."),
    ] = None,
) -> None:
    """
    Show the detected OS family and the lister it selects.
    """
    config = InventoryConfig.load(config_path)
    try:
        os_family = resolve_family(config, None)
    except PackageInventoryError as e:
        log_error(str(e))
        raise typer.Exit(1) from e

    try:
        lister = lister_for_family(os_family).value
    except UnsupportedPlatformError:
        lister = "unsupported"
    typer.echo(f"{os_family}: {lister}")


@app.command()
def version() -> None:
    """Show the application version and exit."""
    typer.echo(f"pkginventory version: {__version__}")


if __name__ == "__main__":
    app()
