"""
Upload request and result models.

UploadParams is the fully resolved request for one spec entry; FileInfo
is what a repository client reports back for each transferred file.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import Field

from .base import ImmutableModel
from .buildinfo import BuildArtifact

if TYPE_CHECKING:
    from ..exceptions import ArtupException


class CommonParams(ImmutableModel):
    """Path and property parameters shared by repository operations."""

    pattern: str
    target: str = ""
    props: str = ""
    exclusions: list[str] = Field(default_factory=list)


class UploadParams(ImmutableModel):
    """Resolved transfer request for a single spec entry."""

    common: CommonParams
    recursive: bool = True
    regexp: bool = False
    include_dirs: bool = False
    flat: bool = True
    explode_archive: bool = False
    deb: str = ""
    symlink: bool = False
    retries: int = Field(default=3, ge=0)

    @property
    def pattern(self) -> str:
        return self.common.pattern

    @property
    def target(self) -> str:
        return self.common.target

    @property
    def props(self) -> str:
        return self.common.props


class FileInfo(ImmutableModel):
    """Descriptor of one file transferred to the repository."""

    local_path: str
    artifactory_path: str
    sha1: str = ""
    md5: str = ""
    sha256: str = ""

    def to_build_artifact(self) -> BuildArtifact:
        """Project this descriptor into a build-info artifact record."""
        return BuildArtifact(
            name=posixpath.basename(self.artifactory_path),
            path=self.artifactory_path,
            sha1=self.sha1,
            md5=self.md5,
            sha256=self.sha256,
        )


@dataclass
class UploadFilesResult:
    """Result of uploading the files matched by one spec entry."""

    files: list[FileInfo] = field(default_factory=list)
    succeeded: int = 0
    failed: int = 0
    error: Exception | None = None


@dataclass
class UploadSummary:
    """Outcome of a whole upload run.

    Counts are meaningful even when ``error`` is set. ``fail_count > 0``
    with no error is a soft failure: some files failed, nothing else did.
    """

    success_count: int = 0
    fail_count: int = 0
    error: ArtupException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.fail_count == 0

    @property
    def status(self) -> str:
        if self.ok:
            return "success"
        if self.error is None:
            return "partial"
        return "failure"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "status": self.status,
            "totals": {"success": self.success_count, "failure": self.fail_count},
        }
        if self.error is not None:
            result["error"] = str(self.error)
        return result
