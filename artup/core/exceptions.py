"""
Custom exception hierarchy for artup.

Every error raised by the upload pipeline derives from ArtupException so
the orchestrator and the CLI can report it with its debugging context.
"""

from __future__ import annotations


class ArtupException(Exception):
    """
    Base exception for all artup errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (file paths, URLs, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ArtupConfigError(ArtupException):
    """Base class for configuration-related errors."""

    recoverable: bool = False


class ConfigurationError(ArtupConfigError, ValueError):
    """
    A spec entry carries a value that cannot be interpreted.

    Raised while resolving upload parameters, e.g. when an override such
    as ``recursive`` is present but is not a boolean literal.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


class InvalidConfigurationError(ArtupConfigError, ValueError):
    """
    Invalid environment or settings value.

    Raised for a malformed JFROG_CLI_MIN_CHECKSUM_DEPLOY_SIZE_KB override.
    """

    def __init__(
        self,
        message: str,
        *,
        variable: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if variable:
            ctx["variable"] = variable
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


class AuthConfigError(ArtupConfigError):
    """Repository connection details cannot produce an auth config."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)


class SpecFileError(ArtupConfigError):
    """
    Error reading or parsing a file spec.

    Raised for JSON errors, missing files and entries without a pattern.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Repository Errors
# =============================================================================


class RepositoryError(ArtupException):
    """Base class for repository service errors."""

    pass


class RepositoryClientError(RepositoryError):
    """
    The repository service client could not be constructed.

    Raised when no client is registered for the URL scheme or the
    client rejects its configuration.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)


class TransferError(RepositoryError):
    """
    Error transferring the files of one spec entry.

    Raised (or returned) by a repository client when an entry could not
    be processed as a whole, e.g. an invalid pattern.
    """

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        target: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if pattern:
            ctx["pattern"] = pattern
        if target:
            ctx["target"] = target
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Build Info Errors
# =============================================================================


class BuildInfoError(ArtupException):
    """
    Error reading or writing build info.

    Covers general details, partial build info and build properties.
    """

    def __init__(
        self,
        message: str,
        *,
        build_name: str | None = None,
        build_number: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if build_name:
            ctx["build_name"] = build_name
        if build_number:
            ctx["build_number"] = build_number
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Upload Errors
# =============================================================================


class UploadFinishedWithErrorsError(ArtupException):
    """
    At least one spec entry failed during the upload loop.

    Deliberately generic: the individual failures are in the log.
    """

    def __init__(
        self,
        message: str = "Upload finished with errors. Please review the logs",
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause)
