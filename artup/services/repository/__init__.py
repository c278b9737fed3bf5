"""
Built-in repository clients.

- LocalRepositoryClient: ``file://`` repositories backed by a directory
"""

from .local import LocalRepositoryClient

__all__ = [
    "LocalRepositoryClient",
]
