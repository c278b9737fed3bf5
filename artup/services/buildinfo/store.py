"""
File-based build info store.

Each build gets a directory named after the SHA-256 of ``<name>_<number>``
holding ``details.json`` and one JSON file per partial build info.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from ...core.exceptions import BuildInfoError
from ...core.interfaces.buildinfo import IBuildInfoStore
from ...core.models.buildinfo import BuildGeneralDetails, PartialBuildInfo

DETAILS_FILE = "details.json"
PARTIALS_DIR = "partials"


class FileBuildInfoStore(IBuildInfoStore):
    """Stores build info as JSON files under ``base_dir``."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = Path(base_dir)

    def build_dir(self, build_name: str, build_number: str) -> Path:
        key = hashlib.sha256(f"{build_name}_{build_number}".encode()).hexdigest()
        return self._base_dir / key

    def save_general_details(self, build_name: str, build_number: str) -> None:
        details_path = self.build_dir(build_name, build_number) / DETAILS_FILE
        if details_path.exists():
            return

        details = BuildGeneralDetails(
            build_name=build_name,
            build_number=build_number,
            timestamp=datetime.now(timezone.utc),
        )
        try:
            details_path.parent.mkdir(parents=True, exist_ok=True)
            details_path.write_text(details.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise BuildInfoError(
                "Failed to save build general details",
                build_name=build_name,
                build_number=build_number,
                cause=e,
            ) from e

    def read_general_details(self, build_name: str, build_number: str) -> BuildGeneralDetails:
        details_path = self.build_dir(build_name, build_number) / DETAILS_FILE
        try:
            return BuildGeneralDetails.model_validate_json(details_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise BuildInfoError(
                "Build general details not found",
                build_name=build_name,
                build_number=build_number,
                cause=e,
            ) from e
        except (OSError, ValidationError) as e:
            raise BuildInfoError(
                "Failed to read build general details",
                build_name=build_name,
                build_number=build_number,
                cause=e,
            ) from e

    def save_partial_build_info(
        self,
        build_name: str,
        build_number: str,
        populate: Callable[[PartialBuildInfo], None],
    ) -> None:
        partial = PartialBuildInfo(timestamp=datetime.now(timezone.utc))
        populate(partial)

        partials_dir = self.build_dir(build_name, build_number) / PARTIALS_DIR
        partial_path = partials_dir / f"partial-{time.time_ns()}.json"
        try:
            partials_dir.mkdir(parents=True, exist_ok=True)
            partial_path.write_text(partial.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise BuildInfoError(
                "Failed to save partial build info",
                build_name=build_name,
                build_number=build_number,
                cause=e,
            ) from e

    def read_partials(self, build_name: str, build_number: str) -> list[PartialBuildInfo]:
        """Read every saved partial of a build, oldest first."""
        partials_dir = self.build_dir(build_name, build_number) / PARTIALS_DIR
        if not partials_dir.is_dir():
            return []
        # File names carry the nanosecond write time.
        return [
            PartialBuildInfo.model_validate_json(path.read_text(encoding="utf-8"))
            for path in sorted(partials_dir.glob("partial-*.json"))
        ]
