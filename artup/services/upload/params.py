"""
Upload parameter resolution.

Turns one spec entry into the UploadParams handed to a repository client.
"""

from __future__ import annotations

from ...core.models.config import UploadConfiguration
from ...core.models.spec import SpecFile
from ...core.models.upload import UploadParams


def get_upload_params(entry: SpecFile, configuration: UploadConfiguration) -> UploadParams:
    """Resolve the upload parameters of a spec entry.

    Overrides missing from the entry fall back to their defaults:
    recursive and flat default to true, the others to false.

    Raises:
        ConfigurationError: If an override is present but is not a boolean
    """
    return UploadParams(
        common=entry.to_common_params(),
        recursive=entry.is_recursive(True),
        regexp=entry.is_regexp(False),
        include_dirs=entry.is_include_dirs(False),
        flat=entry.is_flat(True),
        explode_archive=entry.is_explode(False),
        deb=configuration.deb,
        symlink=configuration.symlink,
        retries=configuration.retries,
    )
