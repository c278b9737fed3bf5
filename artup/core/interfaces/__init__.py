"""
Interface definitions for artup's collaborators.

The upload pipeline depends only on these abstractions; concrete
implementations are registered in the service container.
"""

from .buildinfo import IBuildInfoStore
from .logger import ILogger
from .repository import IRepositoryServiceClient

__all__ = [
    "IBuildInfoStore",
    "ILogger",
    "IRepositoryServiceClient",
]
