"""
Upload service for orchestrating file spec uploads.

Drives every entry of a file spec through a repository client, tolerating
per-entry failures, and records the deployed artifacts in build info when
a build name and number are given.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field

from ...core.container import get_container
from ...core.di import resolve_or_default
from ...core.exceptions import (
    ArtupException,
    BuildInfoError,
    ConfigurationError,
    RepositoryClientError,
    UploadFinishedWithErrorsError,
)
from ...core.interfaces.buildinfo import IBuildInfoStore
from ...core.interfaces.logger import ILogger
from ...core.interfaces.repository import IRepositoryServiceClient
from ...core.models.buildinfo import PartialBuildInfo
from ...core.models.config import ServicesConfig, UploadConfiguration
from ...core.models.spec import SpecFiles
from ...core.models.upload import FileInfo, UploadFilesResult, UploadSummary
from ..buildinfo.properties import create_build_properties
from ..buildinfo.store import FileBuildInfoStore
from ..logging import NullLogger
from .params import get_upload_params
from .props import add_build_props
from .service_config import (
    create_upload_service_config,
    get_min_checksum_deploy_size,
    get_security_dir,
)

ClientFactory = Callable[[ServicesConfig], IRepositoryServiceClient]


@dataclass
class _UploadTally:
    """Results accumulated across spec entries."""

    files: list[FileInfo] = field(default_factory=list)
    success_count: int = 0
    fail_count: int = 0
    errors_occurred: bool = False

    def add(self, result: UploadFilesResult) -> None:
        self.files.extend(result.files)
        self.success_count += result.succeeded
        self.fail_count += result.failed


class UploadService:
    """
    Service for uploading the files of a file spec.

    Entries are processed one at a time in spec order. A failing entry is
    logged and the run moves on; the failure surfaces at the end as a
    generic UploadFinishedWithErrorsError.

    Usage:
        service = UploadService()
        summary = service.upload(spec, configuration)
        if summary.error:
            ...
    """

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        build_info_store: IBuildInfoStore | None = None,
        logger: ILogger | None = None,
    ):
        """
        Initialize upload service with dependencies.

        Args:
            client_factory: Builds a repository client from a ServicesConfig
                (default: the container's repository client registry)
            build_info_store: Build info storage (default: resolved from the
                container, else a file store under the configured home dir)
            logger: Logger (default: resolved from the container)
        """
        self._client_factory = client_factory
        self._build_info_store = build_info_store
        self._logger = logger or resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]

    def upload(self, spec: SpecFiles, configuration: UploadConfiguration) -> UploadSummary:
        """
        Upload every entry of ``spec``.

        Args:
            spec: File spec; entry properties gain build properties when
                build info is collected
            configuration: Run configuration

        Returns:
            UploadSummary with the transfer counts and the run's error, if any
        """
        try:
            client = self._create_client(configuration)
        except ArtupException as e:
            return UploadSummary(error=e)

        store = self._get_build_info_store(configuration)
        collect_build_info = configuration.collect_build_info and not configuration.dry_run
        tally = _UploadTally()

        if collect_build_info:
            try:
                store.save_general_details(configuration.build_name, configuration.build_number)
            except BuildInfoError as e:
                return UploadSummary(error=e)
            self._inject_build_props(spec, configuration, store, tally)

        for index, entry in enumerate(spec.files):
            try:
                params = get_upload_params(entry, configuration)
            except ConfigurationError as e:
                tally.errors_occurred = True
                self._logger.error("Skipping file spec entry %d: %s", index, e)
                continue

            try:
                result = client.upload_files(params)
            except Exception as e:
                tally.errors_occurred = True
                self._logger.error("Upload of %s failed: %s", params.pattern, e)
                continue

            tally.add(result)
            if result.error is not None:
                tally.errors_occurred = True
                self._logger.error("Upload of %s failed: %s", params.pattern, result.error)

        if tally.errors_occurred:
            return UploadSummary(
                tally.success_count, tally.fail_count, UploadFinishedWithErrorsError()
            )
        if tally.fail_count > 0:
            return UploadSummary(tally.success_count, tally.fail_count)

        if collect_build_info:
            try:
                self._save_build_artifacts(store, configuration, tally.files)
            except BuildInfoError as e:
                return UploadSummary(tally.success_count, tally.fail_count, e)

        return UploadSummary(tally.success_count, tally.fail_count)

    def _create_client(self, configuration: UploadConfiguration) -> IRepositoryServiceClient:
        cert_path = get_security_dir(configuration.home_dir)
        min_checksum_deploy_size = get_min_checksum_deploy_size(
            configuration.min_checksum_deploy_size_kb
        )
        services_config = create_upload_service_config(
            configuration.art_details,
            configuration,
            cert_path,
            min_checksum_deploy_size,
            self._logger,
        )
        factory = self._client_factory or get_container().create_repository_client
        try:
            return factory(services_config)
        except ArtupException:
            raise
        except Exception as e:
            raise RepositoryClientError(
                "Failed to create repository client",
                url=services_config.auth.url,
                cause=e,
            ) from e

    def _get_build_info_store(self, configuration: UploadConfiguration) -> IBuildInfoStore:
        if self._build_info_store is not None:
            return self._build_info_store
        return resolve_or_default(
            IBuildInfoStore,  # type: ignore[type-abstract]
            lambda: FileBuildInfoStore(configuration.home_dir / "builds"),
        )

    def _inject_build_props(
        self,
        spec: SpecFiles,
        configuration: UploadConfiguration,
        store: IBuildInfoStore,
        tally: _UploadTally,
    ) -> None:
        formatter = functools.partial(create_build_properties, store)
        for index, entry in enumerate(spec.files):
            try:
                entry.props = add_build_props(
                    entry.props,
                    configuration.build_name,
                    configuration.build_number,
                    formatter,
                )
            except BuildInfoError as e:
                tally.errors_occurred = True
                self._logger.error(
                    "Failed to add build properties to file spec entry %d: %s", index, e
                )

    def _save_build_artifacts(
        self,
        store: IBuildInfoStore,
        configuration: UploadConfiguration,
        files: list[FileInfo],
    ) -> None:
        build_artifacts = [file_info.to_build_artifact() for file_info in files]

        def populate(partial: PartialBuildInfo) -> None:
            partial.artifacts = build_artifacts

        store.save_partial_build_info(
            configuration.build_name, configuration.build_number, populate
        )
        self._logger.debug(
            "Recorded %d artifact(s) in build %s/%s",
            len(build_artifacts),
            configuration.build_name,
            configuration.build_number,
        )


def upload(spec: SpecFiles, configuration: UploadConfiguration) -> UploadSummary:
    """Upload ``spec`` with the default collaborators."""
    return UploadService().upload(spec, configuration)
