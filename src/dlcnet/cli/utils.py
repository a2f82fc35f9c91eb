"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, logging setup and the common
table-loading path used by every command.
"""

import logging
from typing import Optional

import click

from ..config import LayoutSettings
from ..engine import NetworkEngine
from ..loader import DataLoadError


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Print a warning message with a yellow alert symbol."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_engine(
    lookup_file: str,
    network_file: str,
    settings: Optional[LayoutSettings] = None,
) -> Optional[NetworkEngine]:
    """
    Load both tables into a NetworkEngine without starting the layout.

    Args:
        lookup_file (str): Path to the route lookup CSV.
        network_file (str): Path to the DLC network CSV.
        settings (LayoutSettings): Optional layout overrides.

    Returns:
        Optional[NetworkEngine]: The loaded engine, or None if loading failed.
    """
    engine = NetworkEngine(settings=settings, autostart=False)
    try:
        engine.load_files(lookup_file, network_file)
    except DataLoadError as e:
        echo_error(f"Failed to load network data: {e}")
        return None
    return engine
