"""
Build property formatting.

Artifacts deployed as part of a build are tagged with the build's name,
number and start timestamp so they can be traced back to it.
"""

from __future__ import annotations

from ...core.interfaces.buildinfo import IBuildInfoStore


def create_build_properties(store: IBuildInfoStore, build_name: str, build_number: str) -> str:
    """Format the build properties of a build.

    Returns ``build.name=<name>;build.number=<number>;build.timestamp=<ms>``,
    or an empty string when name or number is empty.

    Raises:
        BuildInfoError: If the build's general details cannot be read
    """
    if not build_name or not build_number:
        return ""
    details = store.read_general_details(build_name, build_number)
    return (
        f"build.name={build_name};"
        f"build.number={build_number};"
        f"build.timestamp={details.timestamp_millis}"
    )
