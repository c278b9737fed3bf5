"""
Build info persistence interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from ..models.buildinfo import BuildGeneralDetails, PartialBuildInfo


class IBuildInfoStore(ABC):
    """
    Interface for local build info storage.

    All methods raise BuildInfoError on failure.
    """

    @abstractmethod
    def save_general_details(self, build_name: str, build_number: str) -> None:
        """Record the build's start time, keeping an existing record."""
        pass

    @abstractmethod
    def read_general_details(self, build_name: str, build_number: str) -> BuildGeneralDetails:
        """Read the build's general details."""
        pass

    @abstractmethod
    def save_partial_build_info(
        self,
        build_name: str,
        build_number: str,
        populate: Callable[[PartialBuildInfo], None],
    ) -> None:
        """
        Save a partial build info.

        Args:
            build_name: Build name
            build_number: Build number
            populate: Called with a fresh PartialBuildInfo to fill in
        """
        pass
