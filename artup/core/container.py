"""
Dependency injection container for artup.

Uses dependency-injector for DI with support for:
- Singleton and transient lifetimes
- Factory registration
- Interface-based resolution
- A repository client registry keyed by URL scheme
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

from .interfaces.repository import IRepositoryServiceClient
from .models.config import ServicesConfig

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for artup.

    Combines dependency-injector's DI capabilities with a registry of
    repository clients, one per URL scheme.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        # Dynamic provider storage (interface -> provider)
        self._providers: dict[type, providers.Provider] = {}

        self._repository_clients: dict[str, type[IRepositoryServiceClient]] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core service registration (uses dependency-injector providers)
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/protocol type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(
        self,
        interface: type[T],
        factory: Callable[..., T],
    ) -> None:
        """
        Register a transient service (new instance per resolve).

        Args:
            interface: The interface/protocol type
            factory: Factory function or class
        """
        self._providers[interface] = providers.Factory(factory)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """Override a registered provider (useful for testing)."""
        self._providers[interface] = provider

    # -------------------------------------------------------------------------
    # Repository client registry
    # -------------------------------------------------------------------------

    def register_repository_client(
        self,
        scheme: str,
        client_class: type[IRepositoryServiceClient],
    ) -> None:
        """
        Register a repository client.

        Args:
            scheme: URL scheme (e.g., 'file', 'https')
            client_class: Class implementing IRepositoryServiceClient,
                constructed with a ServicesConfig
        """
        self._repository_clients[scheme] = client_class

    def create_repository_client(self, config: ServicesConfig) -> IRepositoryServiceClient:
        """
        Construct the client registered for the config's URL scheme.

        Raises:
            KeyError: If no client registered for the scheme
        """
        scheme = config.auth.scheme
        if scheme not in self._repository_clients:
            raise KeyError(f"No repository client registered for scheme: {scheme}")
        return self._repository_clients[scheme](config)  # type: ignore[call-arg]

    def list_repository_clients(self) -> list[str]:
        """List registered repository client schemes."""
        return list(self._repository_clients.keys())


# -------------------------------------------------------------------------
# Module-level convenience functions
# -------------------------------------------------------------------------


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the global container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service, returning None if not registered."""
    return get_container().try_resolve(interface)
