"""
Model bases shared by spec, upload and build info models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ArtupBaseModel(BaseModel):
    """Strict, mutable base.

    Used where the pipeline updates a model in place, such as spec entries
    receiving build properties or a partial build info being populated.
    Assignments are validated and unknown fields rejected.
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ImmutableModel(ArtupBaseModel):
    """Frozen base for values passed between the orchestrator and clients."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )
