"""
Build info models.

A build is identified by name and number. Each upload run contributes a
partial build info listing the artifacts it deployed.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ArtupBaseModel, ImmutableModel


class BuildArtifact(ImmutableModel):
    """Artifact entry of a build."""

    name: str
    path: str
    sha1: str = ""
    md5: str = ""
    sha256: str = ""


class BuildGeneralDetails(ImmutableModel):
    """Identity and start time of a build."""

    build_name: str = Field(min_length=1)
    build_number: str = Field(min_length=1)
    timestamp: datetime

    @property
    def timestamp_millis(self) -> int:
        return int(self.timestamp.timestamp()) * 1000 + self.timestamp.microsecond // 1000


class PartialBuildInfo(ArtupBaseModel):
    """Contribution of a single command to a build."""

    timestamp: datetime
    artifacts: list[BuildArtifact] = Field(default_factory=list)
