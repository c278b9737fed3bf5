"""
Path pattern helpers.

Wildcard patterns use ``*`` and ``?``; every wildcard becomes a capture
group so targets can refer to it as ``{1}``, ``{2}``, ...
"""

from __future__ import annotations

import posixpath
import re

_WILDCARDS = "*?"
_REGEX_SPECIALS = set(".^$*+?()[]{}|\\")
_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def wildcard_to_regex(pattern: str) -> str:
    """Convert a wildcard pattern to an anchored regular expression."""
    parts = []
    for char in to_posix(pattern):
        if char == "*":
            parts.append("(.*)")
        elif char == "?":
            parts.append("(.)")
        else:
            parts.append(re.escape(char))
    return "^" + "".join(parts) + "$"


def compile_pattern(pattern: str, regexp: bool) -> re.Pattern[str]:
    """Compile a spec pattern.

    A pattern ending with ``/`` selects the directory's content.

    Raises:
        re.error: If ``regexp`` is set and the pattern is not a valid regex
    """
    if regexp:
        return re.compile(pattern if pattern.startswith("^") else "^" + pattern + "$")
    pattern = to_posix(pattern)
    if pattern.endswith("/"):
        pattern += "*"
    return re.compile(wildcard_to_regex(pattern))


def get_root_path(pattern: str, regexp: bool) -> str:
    """Directory where the search for a pattern starts.

    This is the longest directory prefix without wildcard (or regex)
    characters. An empty string means the current directory.
    """
    pattern = to_posix(pattern)
    specials = _REGEX_SPECIALS if regexp else set(_WILDCARDS)
    index = next((i for i, c in enumerate(pattern) if c in specials), len(pattern))
    prefix = pattern[:index]
    if index == len(pattern) and not pattern.endswith("/"):
        # Plain path: search next to the file.
        return posixpath.dirname(prefix)
    return prefix[: prefix.rfind("/") + 1] if "/" in prefix else ""


def matches_any(path: str, exclusions: list[str]) -> bool:
    """Whether ``path`` matches one of the wildcard exclusion patterns."""
    path = to_posix(path)
    return any(re.match(wildcard_to_regex(exclusion), path) for exclusion in exclusions)


def resolve_target(
    target: str,
    match: re.Match[str],
    local_path: str,
    root: str,
    flat: bool,
) -> str:
    """Compute the repository path of a matched file.

    Placeholders are replaced first. A target ending with ``/`` is a
    directory: the file keeps its name (``flat``) or its path relative
    to the search root.
    """
    groups = match.groups()

    def replace(m: re.Match[str]) -> str:
        index = int(m.group(1))
        if 1 <= index <= len(groups):
            return groups[index - 1] or ""
        return m.group(0)

    resolved = _PLACEHOLDER.sub(replace, target)
    if not resolved.endswith("/"):
        return resolved

    local_path = to_posix(local_path)
    if flat:
        return resolved + posixpath.basename(local_path)
    relative = posixpath.relpath(local_path, root.rstrip("/") or ".")
    return resolved + relative
