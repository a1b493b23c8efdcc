"""Glob resolution of cache path patterns.

Patterns are matched against the workspace and returned as workspace-relative,
forward-slash paths so archive entries can be restored on any runner
regardless of its absolute checkout location.

Pattern syntax:
    - ``*``, ``?``, ``[...]`` and recursive ``**``
    - ``~`` expands to the home directory
    - a leading ``!`` removes earlier matches
    - lines starting with ``#`` are ignored
    - hidden files and directories are matched by wildcards

A pattern matching a directory yields the directory itself, not its
children (the archiver recurses into it).
"""
from __future__ import annotations

import glob
import logging
import os
from pathlib import Path
from typing import Iterable, List, Set, Union

logger = logging.getLogger(__name__)


def to_relative(path: str, workspace: Union[str, Path]) -> str:
    """Convert a matched path to its portable workspace-relative form.

    Args:
        path: Absolute path of a glob match
        workspace: Workspace root directory

    Returns:
        Relative path using ``/`` as separator
    """
    relative = os.path.relpath(os.path.normpath(path), os.path.abspath(workspace))
    return relative.replace(os.sep, "/")


def _expand(pattern: str, workspace: Union[str, Path]) -> List[str]:
    pattern = os.path.expanduser(pattern)
    if not os.path.isabs(pattern):
        pattern = os.path.join(os.path.abspath(workspace), pattern)
    # Dot-entries match like any other name, including under **
    return glob.glob(pattern, recursive=True, include_hidden=True)


def resolve_paths(patterns: Iterable[str], workspace: Union[str, Path]) -> List[str]:
    """Expand glob patterns into the list of paths to archive.

    Args:
        patterns: Ordered path patterns supplied by the caller
        workspace: Workspace root that relative patterns and results refer to

    Returns:
        Workspace-relative paths in match order, without duplicates.
        An empty list is returned when nothing matches.
    """
    resolved: List[str] = []
    seen: Set[str] = set()

    for raw_pattern in patterns:
        pattern = raw_pattern.strip()
        if not pattern or pattern.startswith("#"):
            continue

        if pattern.startswith("!"):
            excluded = {to_relative(match, workspace) for match in _expand(pattern[1:].strip(), workspace)}
            if excluded:
                resolved = [path for path in resolved if path not in excluded]
                seen -= excluded
            continue

        for match in _expand(pattern, workspace):
            relative_path = to_relative(match, workspace)
            if relative_path in seen:
                continue
            seen.add(relative_path)
            logger.debug(f"Matched: {relative_path}")
            resolved.append(relative_path)

    return resolved
