"""
Unit tests for LocalRepositoryClient.

Uploads run from tmp_path with relative patterns into a file:// repository
rooted at tmp_path/repo.
"""

import hashlib
import io
import os
import tarfile
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from artup.core.exceptions import RepositoryClientError, TransferError
from artup.core.models.config import AuthConfig
from artup.core.models.upload import CommonParams, UploadParams
from artup.services.repository.local import (
    LocalRepositoryClient,
    parse_deb,
    parse_props,
)


def _params(pattern: str, target: str, props: str = "", exclusions=None, **kwargs) -> UploadParams:
    return UploadParams(
        common=CommonParams(
            pattern=pattern, target=target, props=props, exclusions=exclusions or []
        ),
        **kwargs,
    )


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Source tree under tmp_path/out, with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "out"
    (out / "sub").mkdir(parents=True)
    (out / "a.txt").write_text("alpha")
    (out / "sub" / "b.txt").write_text("beta")
    (out / "c.log").write_text("log")
    return out


@pytest.fixture
def client(services_config) -> LocalRepositoryClient:
    """Client writing into repo_root."""
    return LocalRepositoryClient(services_config())


class TestParsing:
    """Test property and deb parsing."""

    def test_parse_props(self):
        assert parse_props("a=1;b=x,y;") == {"a": ["1"], "b": ["x", "y"]}

    def test_parse_props_repeated_key(self):
        assert parse_props("a=1;a=2") == {"a": ["1", "2"]}

    @pytest.mark.parametrize("props", ["novalue", "=1"])
    def test_parse_props_invalid(self, props):
        with pytest.raises(ValueError):
            parse_props(props)

    def test_parse_deb(self):
        assert parse_deb("bionic/main/amd64") == {
            "deb.distribution": ["bionic"],
            "deb.component": ["main"],
            "deb.architecture": ["amd64"],
        }

    @pytest.mark.parametrize("deb", ["bionic/main", "bionic//amd64", "a/b/c/d"])
    def test_parse_deb_invalid(self, deb):
        with pytest.raises(ValueError):
            parse_deb(deb)


class TestClientConstruction:
    """Test client construction."""

    def test_missing_root(self, services_config, tmp_path: Path):
        config = services_config(auth=AuthConfig(url=(tmp_path / "missing").as_uri() + "/"))
        with pytest.raises(RepositoryClientError):
            LocalRepositoryClient(config)

    def test_root_from_url(self, client, repo_root: Path):
        assert client.root == repo_root


class TestUploadFiles:
    """Test file selection and target resolution."""

    def test_flat_upload(self, client, workspace, repo_root: Path):
        result = client.upload_files(_params("out/*.txt", "libs/"))

        assert (result.succeeded, result.failed, result.error) == (2, 0, None)
        assert (repo_root / "libs" / "a.txt").read_text() == "alpha"
        assert (repo_root / "libs" / "b.txt").read_text() == "beta"
        assert [f.artifactory_path for f in result.files] == ["libs/a.txt", "libs/b.txt"]
        assert [f.local_path for f in result.files] == ["out/a.txt", "out/sub/b.txt"]

    def test_checksums_reported(self, client, workspace):
        result = client.upload_files(_params("out/a.txt", "libs/"))

        info = result.files[0]
        assert info.sha1 == hashlib.sha1(b"alpha").hexdigest()
        assert info.md5 == hashlib.md5(b"alpha").hexdigest()
        assert info.sha256 == hashlib.sha256(b"alpha").hexdigest()

    def test_non_flat_keeps_structure(self, client, workspace, repo_root: Path):
        result = client.upload_files(_params("out/*.txt", "libs/", flat=False))

        assert result.succeeded == 2
        assert (repo_root / "libs" / "a.txt").exists()
        assert (repo_root / "libs" / "sub" / "b.txt").exists()

    def test_non_recursive(self, client, workspace, repo_root: Path):
        result = client.upload_files(_params("out/*.txt", "libs/", recursive=False))

        assert result.succeeded == 1
        assert [f.artifactory_path for f in result.files] == ["libs/a.txt"]

    def test_placeholders(self, client, workspace, repo_root: Path):
        result = client.upload_files(_params("out/*.txt", "libs/{1}.bak"))

        assert result.succeeded == 2
        assert (repo_root / "libs" / "a.bak").read_text() == "alpha"
        assert (repo_root / "libs" / "sub" / "b.bak").read_text() == "beta"

    def test_regexp(self, client, workspace):
        result = client.upload_files(_params(r"out/.*\.log", "logs/", regexp=True))

        assert [f.artifactory_path for f in result.files] == ["logs/c.log"]

    def test_exclusions(self, client, workspace):
        result = client.upload_files(_params("out/*", "libs/", exclusions=["*.log", "*/sub/*"]))

        assert [f.artifactory_path for f in result.files] == ["libs/a.txt"]

    def test_no_match(self, client, workspace):
        result = client.upload_files(_params("out/*.bin", "libs/"))
        assert (result.succeeded, result.failed, result.error) == (0, 0, None)

    def test_include_dirs(self, client, workspace, repo_root: Path):
        (workspace / "empty").mkdir()

        client.upload_files(_params("out/*", "libs/", flat=False, include_dirs=True))

        assert (repo_root / "libs" / "empty").is_dir()

    def test_empty_target(self, client, workspace):
        result = client.upload_files(_params("out/*", ""))

        assert result.succeeded == 0
        assert isinstance(result.error, TransferError)

    def test_target_outside_root_fails_file(self, client, workspace):
        result = client.upload_files(_params("out/a.txt", "../escape.txt"))

        assert (result.succeeded, result.failed) == (0, 1)
        assert result.error is None


class TestProperties:
    """Test property handling."""

    def test_props_written(self, client, workspace):
        client.upload_files(_params("out/a.txt", "libs/", props="team=core;tags=x,y"))

        assert client.read_props("libs/a.txt") == {"team": ["core"], "tags": ["x", "y"]}

    def test_deb_props(self, client, workspace):
        client.upload_files(_params("out/a.txt", "debs/", deb="bionic/main/amd64"))

        props = client.read_props("debs/a.txt")
        assert props["deb.distribution"] == ["bionic"]
        assert props["deb.architecture"] == ["amd64"]

    def test_invalid_props(self, client, workspace, repo_root: Path):
        result = client.upload_files(_params("out/a.txt", "libs/", props="novalue"))

        assert result.succeeded == 0
        assert isinstance(result.error, TransferError)
        assert not (repo_root / "libs").exists()

    def test_invalid_deb(self, client, workspace):
        result = client.upload_files(_params("out/a.txt", "libs/", deb="bionic"))
        assert isinstance(result.error, TransferError)

    def test_no_props(self, client, workspace):
        client.upload_files(_params("out/a.txt", "libs/"))
        assert client.read_props("libs/a.txt") == {}


class TestTransferModes:
    """Test dry run, checksum deploy, retries, explode and symlinks."""

    def test_dry_run(self, services_config, workspace, repo_root: Path):
        client = LocalRepositoryClient(services_config(dry_run=True))

        result = client.upload_files(_params("out/*.txt", "libs/", props="a=1"))

        assert result.succeeded == 2
        assert not (repo_root / "libs").exists()
        assert not (repo_root / ".properties").exists()

    def test_checksum_deploy_skips_identical(self, services_config, workspace, repo_root: Path):
        (repo_root / "libs").mkdir()
        (repo_root / "libs" / "a.txt").write_text("alpha")
        client = LocalRepositoryClient(services_config(min_checksum_deploy=0))

        with patch.object(LocalRepositoryClient, "_copy") as copy:
            result = client.upload_files(_params("out/a.txt", "libs/"))

        assert result.succeeded == 1
        copy.assert_not_called()

    def test_checksum_deploy_copies_changed(self, services_config, workspace, repo_root: Path):
        (repo_root / "libs").mkdir()
        (repo_root / "libs" / "a.txt").write_text("stale")
        client = LocalRepositoryClient(services_config(min_checksum_deploy=0))

        client.upload_files(_params("out/a.txt", "libs/"))

        assert (repo_root / "libs" / "a.txt").read_text() == "alpha"

    def test_small_files_always_copied(self, client, workspace, repo_root: Path):
        (repo_root / "libs").mkdir()
        (repo_root / "libs" / "a.txt").write_text("alpha")

        with patch.object(LocalRepositoryClient, "_copy") as copy:
            client.upload_files(_params("out/a.txt", "libs/"))

        copy.assert_called_once()

    def test_retry_recovers(self, client, workspace):
        with patch.object(
            LocalRepositoryClient, "_copy", side_effect=[OSError("flaky"), None]
        ) as copy:
            result = client.upload_files(_params("out/a.txt", "libs/", retries=1))

        assert (result.succeeded, result.failed) == (1, 0)
        assert copy.call_count == 2

    def test_retries_exhausted(self, client, workspace):
        with patch.object(LocalRepositoryClient, "_copy", side_effect=OSError("down")) as copy:
            result = client.upload_files(_params("out/a.txt", "libs/", retries=2))

        assert (result.succeeded, result.failed, result.error) == (0, 1, None)
        assert copy.call_count == 3

    def test_corrupt_archive_counts_as_failed_file(self, client, workspace, repo_root: Path):
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
            payload = os.urandom(64 * 1024)
            info = tarfile.TarInfo("payload.bin")
            info.size = len(payload)
            tf.addfile(info, io.BytesIO(payload))
        data = buffer.getvalue()
        (workspace / "bad.tar.gz").write_bytes(data[: len(data) // 2])

        result = client.upload_files(_params("out/*", "libs/", explode_archive=True))

        assert (result.succeeded, result.failed, result.error) == (3, 1, None)
        assert [f.local_path for f in result.files] == ["out/a.txt", "out/c.log", "out/sub/b.txt"]
        assert (repo_root / "libs" / "a.txt").read_text() == "alpha"

    def test_explode_zip(self, client, workspace, repo_root: Path):
        with zipfile.ZipFile(workspace / "bundle.zip", "w") as zf:
            zf.writestr("x.txt", "x")
            zf.writestr("y/z.txt", "z")

        result = client.upload_files(_params("out/*.zip", "libs/", explode_archive=True))

        assert result.succeeded == 1
        assert (repo_root / "libs" / "x.txt").read_text() == "x"
        assert (repo_root / "libs" / "y" / "z.txt").read_text() == "z"
        assert not (repo_root / "libs" / "bundle.zip").exists()

    def test_symlink_uploaded_as_link(self, services_config, workspace, repo_root: Path):
        os.symlink("a.txt", workspace / "link")
        client = LocalRepositoryClient(services_config())

        result = client.upload_files(_params("out/link", "libs/", symlink=True))

        assert result.succeeded == 1
        assert (repo_root / "libs" / "link").read_bytes() == b""
        props = client.read_props("libs/link")
        assert props["symlink.dest"] == ["a.txt"]
        assert props["symlink.destsha1"] == [hashlib.sha1(b"alpha").hexdigest()]

    def test_symlink_followed_by_default(self, client, workspace, repo_root: Path):
        os.symlink("a.txt", workspace / "link")

        client.upload_files(_params("out/link", "libs/"))

        assert (repo_root / "libs" / "link").read_text() == "alpha"
