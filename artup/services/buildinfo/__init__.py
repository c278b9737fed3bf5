"""
Build info services for artup.

- FileBuildInfoStore: local JSON storage of build details and partials
- create_build_properties: build provenance properties for artifacts
"""

from .properties import create_build_properties
from .store import FileBuildInfoStore

__all__ = [
    "FileBuildInfoStore",
    "create_build_properties",
]
