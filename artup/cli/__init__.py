"""
Click-based CLI for artup.

This module provides the main Click command group and serves as the
entry point for the artup CLI.

Usage:
    from artup.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .context import ArtupContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("artup-cli")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="artup")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """artup - upload files to an artifact repository

    Selects local files with path patterns or a JSON file spec, deploys
    them to a repository and optionally records them in build info.

    \b
    Quick Start:
        artup upload "out/*.zip" libs-release/app/
        artup upload --spec upload-spec.json --build-name app --build-number 7
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    elif ctx.obj is None:
        ctx.obj = ArtupContext.create()


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "ArtupContext",
    "__version__",
    "cli",
    "register_commands",
]
