"""
Repository service client interface.

A client transfers the files selected by one UploadParams value. How it
talks to the repository is its own business.
"""

from abc import ABC, abstractmethod

from ..models.upload import UploadFilesResult, UploadParams


class IRepositoryServiceClient(ABC):
    """
    Interface for repository service clients.

    Implementations are constructed from a ServicesConfig and must be
    safe to call repeatedly with different parameter sets.
    """

    @abstractmethod
    def upload_files(self, params: UploadParams) -> UploadFilesResult:
        """
        Upload every file selected by ``params``.

        Returns a complete tally once all files are done. Per-file
        failures are counted in ``failed``; an error that prevented the
        entry from being processed is set on ``error``.
        """
        pass
