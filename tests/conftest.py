"""
Shared pytest fixtures for artup tests.

This module provides:
- isolated_env: clears JFROG_CLI_* variables and points the home dir at tmp_path
- clean_container: resets the global service container between tests
- repo_root / services_config: a file:// repository for client tests
- upload_configuration: factory for UploadConfiguration values
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from artup.core.bootstrap import reset
from artup.core.models.config import (
    ArtifactoryDetails,
    AuthConfig,
    ServicesConfig,
    UploadConfiguration,
)
from artup.services.logging import NullLogger


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Remove artup environment variables and use a private home dir."""
    for name in list(os.environ):
        if name.startswith("JFROG_CLI_"):
            monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    monkeypatch.setenv("JFROG_CLI_HOME_DIR", str(home))
    return home


@pytest.fixture(autouse=True)
def clean_container():
    """Give every test a fresh service container."""
    reset()
    yield
    reset()


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Empty directory serving as a file:// repository."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def services_config(repo_root: Path, tmp_path: Path) -> Callable[..., ServicesConfig]:
    """Factory for ServicesConfig values pointing at repo_root."""

    def make(**overrides: Any) -> ServicesConfig:
        values: dict[str, Any] = {
            "auth": AuthConfig(url=repo_root.as_uri() + "/"),
            "dry_run": False,
            "cert_path": tmp_path / "home" / "security",
            "min_checksum_deploy": 10240 * 1000,
            "threads": 2,
            "logger": NullLogger(),
        }
        values.update(overrides)
        return ServicesConfig(**values)

    return make


@pytest.fixture
def upload_configuration(tmp_path: Path) -> Callable[..., UploadConfiguration]:
    """Factory for UploadConfiguration values with a file:// server."""

    def make(**overrides: Any) -> UploadConfiguration:
        values: dict[str, Any] = {
            "art_details": ArtifactoryDetails(url="file:///srv/repo"),
            "home_dir": tmp_path / "home",
        }
        values.update(overrides)
        return UploadConfiguration(**values)

    return make
