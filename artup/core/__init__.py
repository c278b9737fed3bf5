"""
Core infrastructure for artup.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Interface definitions for the upload pipeline's collaborators
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    ArtupConfigError,
    ArtupException,
    AuthConfigError,
    BuildInfoError,
    ConfigurationError,
    InvalidConfigurationError,
    RepositoryClientError,
    RepositoryError,
    SpecFileError,
    TransferError,
    UploadFinishedWithErrorsError,
)

__all__ = [
    "ArtupConfigError",
    "ArtupException",
    "AuthConfigError",
    "BuildInfoError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "RepositoryClientError",
    "RepositoryError",
    "ServiceContainer",
    "SpecFileError",
    "TransferError",
    "UploadFinishedWithErrorsError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
