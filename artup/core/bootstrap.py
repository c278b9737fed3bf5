"""
Application bootstrap for artup.

Initializes the DI container with the logger, the build info store and
the built-in repository clients. Called once at CLI startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.buildinfo import IBuildInfoStore
from .interfaces.logger import ILogger

if TYPE_CHECKING:
    from .settings import ArtupSettings

_initialized = False


def bootstrap(settings: ArtupSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the artup application.

    Args:
        settings: Loaded settings (loaded from the environment if omitted)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    if settings is None:
        from .settings import load_settings

        settings = load_settings()

    _register_core_services(container, settings)
    _register_repository_clients(container)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: ArtupSettings) -> None:
    """Register the logger and the build info store."""
    from ..services.buildinfo.store import FileBuildInfoStore
    from ..services.logging import ArtupLogger

    def create_logger() -> ILogger:
        log_file = settings.home_dir / "logs" / "artup.log" if settings.log_file else None
        return ArtupLogger(level=settings.log_level, log_file=log_file)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_singleton(
        IBuildInfoStore,  # type: ignore[type-abstract]
        implementation=FileBuildInfoStore(settings.home_dir / "builds"),
    )


def _register_repository_clients(container: ServiceContainer) -> None:
    """Register the built-in repository clients."""
    from ..services.repository.local import LocalRepositoryClient

    container.register_repository_client("file", LocalRepositoryClient)


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized


def reset() -> None:
    """Reset the bootstrap state (for testing)."""
    global _initialized
    _initialized = False
    ServiceContainer.reset()
