"""
File spec models.

A file spec is an ordered list of entries, each mapping a local path
pattern to a target path in the repository. Overrides are kept as the
raw strings found in the spec and interpreted lazily, so that one
malformed entry only affects itself.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError, SpecFileError
from .base import ArtupBaseModel
from .upload import CommonParams

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SPEC_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def parse_bool(value: str) -> bool:
    """Parse a boolean literal.

    Raises:
        ValueError: If the value is not a recognised literal
    """
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {value!r}")


def parse_spec_vars(raw: str | None) -> dict[str, str]:
    """Parse ``key1=value1;key2=value2`` into a dict."""
    variables: dict[str, str] = {}
    if not raw:
        return variables
    for pair in raw.split(";"):
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        if not sep:
            raise SpecFileError(f"Invalid spec variable, expected key=value: {pair}")
        variables[key.strip()] = value
    return variables


class SpecFile(ArtupBaseModel):
    """One entry of a file spec.

    Overrides are ``None`` when absent. JSON booleans are accepted and
    normalised to their string form.
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    pattern: str
    target: str = ""
    props: str = ""
    exclusions: list[str] = Field(default_factory=list)
    recursive: str | None = None
    regexp: str | None = None
    include_dirs: str | None = Field(default=None, alias="includeDirs")
    flat: str | None = None
    explode: str | None = None

    @field_validator("recursive", "regexp", "include_dirs", "flat", "explode", mode="before")
    @classmethod
    def normalize_override(cls, v: Any) -> Any:
        """Store JSON booleans as the literals the parser understands."""
        if isinstance(v, bool):
            return "true" if v else "false"
        return v

    def _get_bool_or_default(self, key: str, raw: str | None, default: bool) -> bool:
        if raw is None or raw == "":
            return default
        try:
            return parse_bool(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"The value of '{key}' in the file spec must be a boolean",
                key=key,
                value=raw,
                cause=e,
            ) from e

    def is_recursive(self, default: bool) -> bool:
        return self._get_bool_or_default("recursive", self.recursive, default)

    def is_regexp(self, default: bool) -> bool:
        return self._get_bool_or_default("regexp", self.regexp, default)

    def is_include_dirs(self, default: bool) -> bool:
        return self._get_bool_or_default("includeDirs", self.include_dirs, default)

    def is_flat(self, default: bool) -> bool:
        return self._get_bool_or_default("flat", self.flat, default)

    def is_explode(self, default: bool) -> bool:
        return self._get_bool_or_default("explode", self.explode, default)

    def to_common_params(self) -> CommonParams:
        """Project the path and property fields shared by all operations."""
        return CommonParams(
            pattern=self.pattern,
            target=self.target,
            props=self.props,
            exclusions=list(self.exclusions),
        )


class SpecFiles(ArtupBaseModel):
    """An ordered file spec."""

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    files: list[SpecFile] = Field(default_factory=list)

    def get(self, index: int) -> SpecFile:
        return self.files[index]

    def __len__(self) -> int:
        return len(self.files)

    @classmethod
    def from_args(
        cls,
        pattern: str,
        target: str,
        props: str = "",
        exclusions: list[str] | None = None,
        **overrides: str | None,
    ) -> SpecFiles:
        """Build a single-entry spec from command-line arguments.

        Args:
            pattern: Local path pattern
            target: Target path in the repository
            props: Semicolon-separated properties
            exclusions: Patterns to skip
            **overrides: Raw override strings (recursive, flat, ...)
        """
        entry = SpecFile(
            pattern=pattern,
            target=target,
            props=props,
            exclusions=exclusions or [],
            **{k: v for k, v in overrides.items() if v is not None},
        )
        return cls(files=[entry])

    @classmethod
    def from_json_file(cls, path: Path, variables: dict[str, str] | None = None) -> SpecFiles:
        """Load a spec from a JSON file.

        ``${name}`` placeholders are replaced with ``variables`` before
        parsing. Unknown placeholders are left untouched.

        Raises:
            SpecFileError: If the file cannot be read or is not a valid spec
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise SpecFileError("Failed to read file spec", file_path=str(path), cause=e) from e

        if variables:
            content = _SPEC_VAR_PATTERN.sub(
                lambda m: variables.get(m.group(1), m.group(0)),
                content,
            )

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SpecFileError(
                f"Failed to parse file spec: {e}", file_path=str(path), cause=e
            ) from e

        try:
            spec = cls.model_validate(data, strict=False)
        except ValidationError as e:
            raise SpecFileError(
                f"Invalid file spec: {e.error_count()} validation error(s)",
                file_path=str(path),
                cause=e,
            ) from e

        if not spec.files:
            raise SpecFileError("File spec has no entries", file_path=str(path))
        return spec
