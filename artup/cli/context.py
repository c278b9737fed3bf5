"""
Click context extension for artup CLI.

Provides ArtupContext dataclass that holds artup-specific data passed
through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from ..core.settings import ArtupSettings, load_settings


@dataclass
class ArtupContext:
    """Extended context passed through Click command chain.

    Attributes:
        settings: Settings loaded from the environment and config file
        cwd: Current working directory
    """

    settings: ArtupSettings
    cwd: Path

    @classmethod
    def create(cls, cwd: Path | None = None) -> ArtupContext:
        """Create an ArtupContext for the current environment.

        Raises:
            click.ClickException: If the settings are invalid or the
                config file cannot be read
        """
        try:
            settings = load_settings()
        except ValidationError as e:
            raise click.ClickException(f"Invalid configuration: {e}") from e
        if settings.config_error:
            raise click.ClickException(settings.config_error)

        return cls(settings=settings, cwd=cwd or Path.cwd())
