"""
Directory-backed repository client.

Serves ``file://`` repository URLs: the URL path is the repository root
and a target ``repo/path/name`` is stored at ``<root>/repo/path/name``.
Properties are kept next to the content in a ``.properties`` tree.
"""

from __future__ import annotations

import hashlib
import json
import os
import re
import shutil
import tarfile
import zipfile
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from ...core.exceptions import RepositoryClientError, TransferError
from ...core.interfaces.repository import IRepositoryServiceClient
from ...core.models.config import ServicesConfig
from ...core.models.upload import FileInfo, UploadFilesResult, UploadParams
from .patterns import compile_pattern, get_root_path, matches_any, resolve_target, to_posix

PROPERTIES_DIR = ".properties"
CHUNK_SIZE = 1024 * 1024

_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")


@dataclass(frozen=True)
class _UploadTask:
    local_path: str
    target: str


@dataclass(frozen=True)
class _Checksums:
    sha1: str
    md5: str
    sha256: str


def calc_checksums(path: Path) -> _Checksums:
    """SHA-1, MD5 and SHA-256 of a file."""
    sha1, md5, sha256 = hashlib.sha1(), hashlib.md5(), hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            sha1.update(chunk)
            md5.update(chunk)
            sha256.update(chunk)
    return _Checksums(sha1.hexdigest(), md5.hexdigest(), sha256.hexdigest())


_EMPTY_CHECKSUMS = _Checksums(
    hashlib.sha1(b"").hexdigest(),
    hashlib.md5(b"").hexdigest(),
    hashlib.sha256(b"").hexdigest(),
)


def parse_props(props: str) -> dict[str, list[str]]:
    """Parse ``k1=v1;k2=v2,v3`` into a dict of value lists.

    Raises:
        ValueError: If a property has no ``=`` or an empty key
    """
    parsed: dict[str, list[str]] = {}
    for prop in props.split(";"):
        if not prop:
            continue
        key, sep, value = prop.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid property: {prop!r}")
        parsed.setdefault(key, []).extend(value.split(","))
    return parsed


def parse_deb(deb: str) -> dict[str, list[str]]:
    """Parse ``distribution/component/architecture`` into deb properties.

    Raises:
        ValueError: If the value does not have exactly three parts
    """
    parts = deb.split("/")
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Invalid deb value, expected distribution/component/architecture: {deb!r}")
    distribution, component, architecture = parts
    return {
        "deb.distribution": [distribution],
        "deb.component": [component],
        "deb.architecture": [architecture],
    }


def is_archive(path: str) -> bool:
    return path.endswith(".zip") or path.endswith(_TAR_SUFFIXES)


class LocalRepositoryClient(IRepositoryServiceClient):
    """Repository client writing into a local directory."""

    def __init__(self, config: ServicesConfig) -> None:
        """
        Args:
            config: Services config with a ``file://`` URL

        Raises:
            RepositoryClientError: If the repository root is not a directory
        """
        self._config = config
        self._logger = config.logger
        self._root = Path(url2pathname(urlparse(config.auth.url).path))
        if not self._root.is_dir():
            raise RepositoryClientError(
                "Repository root is not a directory", url=config.auth.url
            )

    @property
    def root(self) -> Path:
        return self._root

    def upload_files(self, params: UploadParams) -> UploadFilesResult:
        if not params.target:
            return UploadFilesResult(
                error=TransferError("Upload target is empty", pattern=params.pattern)
            )

        try:
            props = parse_props(params.props)
            if params.deb:
                props.update(parse_deb(params.deb))
            tasks = self._collect(params)
        except (ValueError, re.error, OSError) as e:
            return UploadFilesResult(
                error=TransferError(
                    f"Failed to prepare upload: {e}",
                    pattern=params.pattern,
                    target=params.target,
                    cause=e,
                )
            )

        self._logger.debug("Found %d file(s) matching %s", len(tasks), params.pattern)

        result = UploadFilesResult()
        with ThreadPoolExecutor(max_workers=self._config.threads) as executor:
            futures = [executor.submit(self._upload_file, task, params, props) for task in tasks]
            for task, future in zip(tasks, futures):
                try:
                    result.files.append(future.result())
                    result.succeeded += 1
                except Exception as e:
                    result.failed += 1
                    self._logger.error("Failed uploading %s: %s", task.local_path, e)
        return result

    # -------------------------------------------------------------------------
    # File collection
    # -------------------------------------------------------------------------

    def _collect(self, params: UploadParams) -> list[_UploadTask]:
        regex = compile_pattern(params.pattern, params.regexp)
        root = get_root_path(params.pattern, params.regexp)
        walk_dir = root or "."

        tasks: list[_UploadTask] = []
        for dirpath, dirnames, filenames in os.walk(walk_dir, followlinks=False):
            dirnames.sort()
            names = sorted(filenames)
            if params.symlink:
                # Directory symlinks are uploaded as links, not descended into.
                names += sorted(d for d in dirnames if os.path.islink(os.path.join(dirpath, d)))
                dirnames[:] = [d for d in dirnames if not os.path.islink(os.path.join(dirpath, d))]

            for name in names:
                path = self._local_path(dirpath, name, root)
                task = self._match(path, regex, root, params)
                if task is not None:
                    tasks.append(task)

            if params.include_dirs:
                for name in dirnames:
                    path = self._local_path(dirpath, name, root)
                    task = self._match(path, regex, root, params)
                    if task is not None:
                        self._create_dir(task.target)

            if not params.recursive:
                break
        return tasks

    @staticmethod
    def _local_path(dirpath: str, name: str, root: str) -> str:
        path = to_posix(os.path.join(dirpath, name))
        if not root and path.startswith("./"):
            path = path[2:]
        return path

    @staticmethod
    def _match(
        path: str, regex: re.Pattern[str], root: str, params: UploadParams
    ) -> _UploadTask | None:
        match = regex.match(path)
        if match is None or matches_any(path, params.common.exclusions):
            return None
        target = resolve_target(params.target, match, path, root, params.flat)
        return _UploadTask(local_path=path, target=target)

    def _create_dir(self, target: str) -> None:
        if self._config.dry_run:
            self._logger.info("[Dry run] Creating folder: %s", target)
            return
        self._destination(target).mkdir(parents=True, exist_ok=True)

    # -------------------------------------------------------------------------
    # Transfer
    # -------------------------------------------------------------------------

    def _destination(self, target: str) -> Path:
        dest = (self._root / target.lstrip("/")).resolve()
        root = self._root.resolve()
        if dest != root and root not in dest.parents:
            raise ValueError(f"Target escapes the repository root: {target}")
        return dest

    def _upload_file(
        self,
        task: _UploadTask,
        params: UploadParams,
        props: dict[str, list[str]],
    ) -> FileInfo:
        local = Path(task.local_path)
        dest = self._destination(task.target)
        file_props = {k: list(v) for k, v in props.items()}

        if params.symlink and local.is_symlink():
            link_dest = os.readlink(local)
            file_props["symlink.dest"] = [link_dest]
            if local.is_file():
                file_props["symlink.destsha1"] = [calc_checksums(local).sha1]
            checksums = _EMPTY_CHECKSUMS
        else:
            checksums = calc_checksums(local)

        file_info = FileInfo(
            local_path=task.local_path,
            artifactory_path=task.target,
            sha1=checksums.sha1,
            md5=checksums.md5,
            sha256=checksums.sha256,
        )

        if self._config.dry_run:
            self._logger.info("[Dry run] Uploading artifact: %s", task.target)
            return file_info

        self._logger.info("Uploading artifact: %s", task.target)
        if "symlink.dest" in file_props:
            self._with_retries(params.retries, task, lambda: self._write_empty(dest))
        elif params.explode_archive and is_archive(task.local_path):
            self._with_retries(params.retries, task, lambda: self._explode(local, dest.parent))
        elif self._checksum_deployed(local, dest, checksums):
            self._logger.debug("Checksum deploy: %s already holds identical content", task.target)
        else:
            self._with_retries(params.retries, task, lambda: self._copy(local, dest))

        self._write_props(task.target, file_props)
        return file_info

    def _with_retries(self, retries: int, task: _UploadTask, action: Callable[[], None]) -> None:
        for attempt in range(retries + 1):
            try:
                action()
                return
            except OSError as e:
                if attempt == retries:
                    raise
                self._logger.warning(
                    "Attempt %d to upload %s failed, retrying: %s", attempt + 1, task.local_path, e
                )

    def _checksum_deployed(self, local: Path, dest: Path, checksums: _Checksums) -> bool:
        if local.stat().st_size < self._config.min_checksum_deploy or not dest.is_file():
            return False
        return calc_checksums(dest).sha1 == checksums.sha1

    @staticmethod
    def _copy(local: Path, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(local, dest)

    @staticmethod
    def _write_empty(dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(b"")

    @staticmethod
    def _explode(archive: Path, dest_dir: Path) -> None:
        dest_dir.mkdir(parents=True, exist_ok=True)
        if archive.name.endswith(".zip"):
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(dest_dir)
        else:
            with tarfile.open(archive) as tf:
                tf.extractall(dest_dir, filter="data")

    def _write_props(self, target: str, props: dict[str, list[str]]) -> None:
        if not props:
            return
        props_path = self._root / PROPERTIES_DIR / (target.lstrip("/") + ".json")
        props_path.parent.mkdir(parents=True, exist_ok=True)
        props_path.write_text(json.dumps(props, indent=2, sort_keys=True), encoding="utf-8")

    def read_props(self, target: str) -> dict[str, list[str]]:
        """Properties stored for an artifact (empty if none)."""
        props_path = self._root / PROPERTIES_DIR / (target.lstrip("/") + ".json")
        if not props_path.exists():
            return {}
        return json.loads(props_path.read_text(encoding="utf-8"))
