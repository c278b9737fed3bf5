"""
Build property injection.
"""

from __future__ import annotations

from collections.abc import Callable

PROPS_SEPARATOR = ";"


def add_build_props(
    props: str,
    build_name: str,
    build_number: str,
    formatter: Callable[[str, str], str],
) -> str:
    """Append build properties to a property string.

    Args:
        props: Existing semicolon-separated properties
        build_name: Build name
        build_number: Build number
        formatter: Produces the build property fragment for (name, number)

    Returns:
        The new property string; ``props`` unchanged if name or number is empty

    Raises:
        Whatever ``formatter`` raises.
    """
    if not build_name or not build_number:
        return props

    build_props = formatter(build_name, build_number)

    if props and not props.endswith(PROPS_SEPARATOR) and build_props:
        props += PROPS_SEPARATOR
    return props + build_props
