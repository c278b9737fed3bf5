"""
artup - upload files to an artifact repository.

Selects local files with path patterns or a file spec, deploys them
through a repository client and records them in build info.

Usage:
    from artup import SpecFiles, UploadConfiguration, UploadService

    spec = SpecFiles.from_args("out/*.zip", "libs-release/app/")
    summary = UploadService().upload(spec, UploadConfiguration(...))
"""

from .core.models import SpecFile, SpecFiles, UploadConfiguration, UploadSummary
from .services.upload import UploadService, upload

__all__ = [
    "SpecFile",
    "SpecFiles",
    "UploadConfiguration",
    "UploadService",
    "UploadSummary",
    "upload",
]
