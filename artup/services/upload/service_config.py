"""
Repository service configuration.

Assembles the ServicesConfig a repository client is constructed from.
"""

from __future__ import annotations

import re
from pathlib import Path

from ...core.exceptions import InvalidConfigurationError
from ...core.interfaces.logger import ILogger
from ...core.models.config import ArtifactoryDetails, ServicesConfig, UploadConfiguration

MIN_CHECKSUM_DEPLOY_SIZE_ENV = "JFROG_CLI_MIN_CHECKSUM_DEPLOY_SIZE_KB"
DEFAULT_MIN_CHECKSUM_DEPLOY_SIZE_KB = 10240
# Kilobytes are converted with a factor of 1000, not 1024.
KB = 1000

_DIGITS = re.compile(r"\+?[0-9]+")


def get_min_checksum_deploy_size(raw_kb: str | None) -> int:
    """Resolve the minimum checksum-deploy size in bytes.

    Args:
        raw_kb: Override in kilobytes as read from the environment, or None

    Raises:
        InvalidConfigurationError: If the override is not a non-negative integer
    """
    if raw_kb is None or raw_kb == "":
        return DEFAULT_MIN_CHECKSUM_DEPLOY_SIZE_KB * KB
    if not _DIGITS.fullmatch(raw_kb):
        raise InvalidConfigurationError(
            f"{MIN_CHECKSUM_DEPLOY_SIZE_ENV} must be a non-negative integer",
            variable=MIN_CHECKSUM_DEPLOY_SIZE_ENV,
            value=raw_kb,
        )
    return int(raw_kb) * KB


def get_security_dir(home_dir: Path) -> Path:
    """Directory holding trusted certificates."""
    return Path(home_dir) / "security"


def create_upload_service_config(
    art_details: ArtifactoryDetails,
    configuration: UploadConfiguration,
    cert_path: Path,
    min_checksum_deploy_size: int,
    logger: ILogger,
) -> ServicesConfig:
    """Build the repository client configuration for an upload run.

    Raises:
        AuthConfigError: If the connection details are invalid
    """
    auth = art_details.create_auth_config()
    return ServicesConfig(
        auth=auth,
        dry_run=configuration.dry_run,
        cert_path=cert_path,
        min_checksum_deploy=min_checksum_deploy_size,
        threads=configuration.threads,
        logger=logger,
    )
