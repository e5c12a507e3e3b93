"""
Build System Detector
=====================
Detects the build system from marker files in the workspace root.

Only consulted when no build system is configured explicitly.
Pure heuristic matching; first match wins.
"""
import os
from typing import Optional, Union
from pathlib import Path


# ---------------------------------------------------------------------------
# Marker File → Build System mapping (ordered by priority)
# ---------------------------------------------------------------------------
MARKER_MAP: list[tuple[str, str]] = [
    ("MODULE.bazel",    "bazel"),
    ("WORKSPACE.bazel", "bazel"),
    ("WORKSPACE",       "bazel"),
    (".bazelrc",        "bazel"),
    (".blazerc",        "blaze"),
]


def detect_build_system(workspace_root: Union[str, Path]) -> Optional[str]:
    """
    Scan the workspace root for marker files and return the build system.

    Parameters
    ----------
    workspace_root : str | Path
        Absolute path to the workspace root.

    Returns
    -------
    str | None
        "bazel" or "blaze", or None if the directory is missing or holds
        no marker file. Only the root directory is checked.
    """
    if not os.path.isdir(workspace_root):
        return None

    for marker, build_system in MARKER_MAP:
        if os.path.isfile(os.path.join(workspace_root, marker)):
            return build_system

    return None


def detect_all_markers(workspace_root: Union[str, Path]) -> list[str]:
    """Return every marker file present in the workspace root, in priority order."""
    if not os.path.isdir(workspace_root):
        return []

    return [
        marker for marker, _ in MARKER_MAP
        if os.path.isfile(os.path.join(workspace_root, marker))
    ]
