"""
Pydantic models for artup.

This package provides typed, validated models for file specs, upload
requests and results, configuration and build info.
"""

from .base import ArtupBaseModel, ImmutableModel
from .buildinfo import BuildArtifact, BuildGeneralDetails, PartialBuildInfo
from .config import (
    ArtifactoryDetails,
    AuthConfig,
    ConfigBaseModel,
    ServicesConfig,
    UploadConfiguration,
)
from .spec import SpecFile, SpecFiles, parse_bool, parse_spec_vars
from .upload import CommonParams, FileInfo, UploadFilesResult, UploadParams, UploadSummary

__all__ = [
    "ArtifactoryDetails",
    "ArtupBaseModel",
    "AuthConfig",
    "BuildArtifact",
    "BuildGeneralDetails",
    "CommonParams",
    "ConfigBaseModel",
    "FileInfo",
    "ImmutableModel",
    "PartialBuildInfo",
    "ServicesConfig",
    "SpecFile",
    "SpecFiles",
    "UploadConfiguration",
    "UploadFilesResult",
    "UploadParams",
    "UploadSummary",
    "parse_bool",
    "parse_spec_vars",
]
