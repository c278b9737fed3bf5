"""
Configuration models.

Provides Pydantic models for repository connection details and the
per-run upload configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated
from urllib.parse import urlparse

from pydantic import ConfigDict, Field, field_validator

from ..exceptions import AuthConfigError
from .base import ArtupBaseModel, ImmutableModel

if TYPE_CHECKING:
    from ..interfaces.logger import ILogger

DEFAULT_THREADS = 3
DEFAULT_RETRIES = 3


class ConfigBaseModel(ArtupBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class AuthConfig(ImmutableModel):
    """Validated credentials for a repository client."""

    url: str
    user: str | None = None
    password: str | None = None
    access_token: str | None = None

    @property
    def scheme(self) -> str:
        return urlparse(self.url).scheme


class ArtifactoryDetails(ConfigBaseModel):
    """Stored connection details of a repository server."""

    url: Annotated[str, Field(max_length=2048)] | None = None
    user: str | None = None
    password: str | None = None
    access_token: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, v: str | None) -> str | None:
        """Treat an empty URL as unset."""
        if v is None or v == "":
            return None
        return v

    def create_auth_config(self) -> AuthConfig:
        """Build the auth config used by repository clients.

        Raises:
            AuthConfigError: If the URL is missing or malformed, or the
                credentials are incomplete
        """
        if not self.url:
            raise AuthConfigError("Repository URL is not configured")

        parsed = urlparse(self.url)
        if not parsed.scheme:
            raise AuthConfigError("Repository URL must include a scheme", url=self.url)

        if self.user and not (self.password or self.access_token):
            raise AuthConfigError(
                "A password or access token is required when a user is set", url=self.url
            )
        if self.password and not self.user:
            raise AuthConfigError("A user is required when a password is set", url=self.url)

        url = self.url if self.url.endswith("/") else self.url + "/"
        return AuthConfig(
            url=url,
            user=self.user,
            password=self.password,
            access_token=self.access_token,
        )


class UploadConfiguration(ConfigBaseModel):
    """Per-run upload configuration.

    ``min_checksum_deploy_size_kb`` holds the raw environment override as
    read at startup; it is resolved to bytes when the run starts.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=False,
        extra="forbid",
        populate_by_name=True,
    )

    deb: str = ""
    threads: int = Field(default=DEFAULT_THREADS, ge=1)
    min_checksum_deploy_size_kb: str | None = None
    build_name: str = ""
    build_number: str = ""
    dry_run: bool = False
    symlink: bool = False
    explode_archive: bool = False
    art_details: ArtifactoryDetails = Field(default_factory=ArtifactoryDetails)
    retries: int = Field(default=DEFAULT_RETRIES, ge=0)
    home_dir: Path = Field(default_factory=lambda: Path.home() / ".artup")

    @property
    def collect_build_info(self) -> bool:
        """Whether build name and number are both set."""
        return bool(self.build_name) and bool(self.build_number)


@dataclass(frozen=True)
class ServicesConfig:
    """Configuration a repository service client is constructed from."""

    auth: AuthConfig
    dry_run: bool
    cert_path: Path
    min_checksum_deploy: int
    threads: int
    logger: ILogger
