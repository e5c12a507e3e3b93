"""
Path Primitives
===============
Immutable path values exchanged between the build tool output and the IDE.

    ExecutionRootPath — absolute, or relative to the build tool's execution root
    WorkspaceRoot     — the developer's source tree root directory
    WorkspacePath     — a validated path relative to the workspace root

Constructing these never touches the filesystem.
"""
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

_REPEATED_SEP = re.compile(re.escape(os.sep) + "+")


def _normalize_separators(path: str) -> str:
    """Collapse repeated separators and drop a trailing one, keeping '.' segments."""
    if os.altsep:
        path = path.replace(os.altsep, os.sep)
    path = _REPEATED_SEP.sub(lambda _match: os.sep, path)
    if len(path) > 1 and path.endswith(os.sep):
        path = path[:-1]
    return path


def _escapes_root(relative_path: str) -> bool:
    depth = 0
    for segment in relative_path.replace(os.sep, "/").split("/"):
        if segment == "..":
            depth -= 1
            if depth < 0:
                return True
        elif segment not in ("", "."):
            depth += 1
    return False


@dataclass(frozen=True)
class ExecutionRootPath:
    """
    A path emitted by the build tool, either absolute or execution-root-relative.

    Fields
    ------
    path : Path
        The path as a pathlib value, used for joining onto a root.
    path_string : str
        The path as given, with separators normalized but '.' segments kept.
        Classification and workspace delegation read this form.
    """
    path: Path
    path_string: str = field(init=False)

    def __post_init__(self) -> None:
        raw = os.fspath(self.path)
        object.__setattr__(self, "path_string", _normalize_separators(raw))
        object.__setattr__(self, "path", Path(raw))

    @property
    def is_absolute(self) -> bool:
        return self.path.is_absolute()

    @property
    def absolute_or_relative_file(self) -> Path:
        return self.path

    def file_rooted_at(self, root: Union[str, Path]) -> Path:
        """Return the path unchanged if absolute, otherwise joined onto ``root``."""
        if self.is_absolute:
            return self.path
        return Path(root) / self.path

    def __str__(self) -> str:
        return self.path_string


@dataclass(frozen=True)
class WorkspacePath:
    """
    A path relative to the workspace root, using forward slashes.

    The empty string denotes the workspace root itself. Invalid strings raise
    ValueError on construction; use ``create_if_valid`` where absence is the
    expected failure mode.
    """
    relative_path: str

    def __post_init__(self) -> None:
        error = self.validate(self.relative_path)
        if error is not None:
            raise ValueError(error)

    @staticmethod
    def validate(relative_path: str) -> Optional[str]:
        """
        Check a candidate workspace path.

        Returns
        -------
        str | None
            Human-readable reason the path is invalid, or None if valid.
        """
        if relative_path.startswith("/"):
            return f"Workspace path must be relative; cannot start with '/': {relative_path}"
        if _escapes_root(relative_path):
            return f"Workspace path must be inside the workspace; cannot escape via '..': {relative_path}"
        if relative_path.endswith("/"):
            return f"Workspace path may not end with '/': {relative_path}"
        if ":" in relative_path:
            return f"Workspace path may not contain ':': {relative_path}"
        return None

    @classmethod
    def create_if_valid(cls, relative_path: str) -> Optional["WorkspacePath"]:
        if cls.validate(relative_path) is not None:
            return None
        return cls(relative_path)

    def is_workspace_root(self) -> bool:
        return self.relative_path in ("", ".")

    def __str__(self) -> str:
        return self.relative_path


@dataclass(frozen=True)
class WorkspaceRoot:
    """The root directory of the developer's workspace."""
    directory: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "directory", Path(self.directory))

    @property
    def name(self) -> str:
        return self.directory.name

    def file_for_path(self, workspace_path: WorkspacePath) -> Path:
        if workspace_path.is_workspace_root():
            return self.directory
        return self.directory / workspace_path.relative_path

    def is_in_workspace(self, file: Union[str, Path]) -> bool:
        return self.workspace_path_for(file) is not None

    def workspace_path_for(self, file: Union[str, Path]) -> Optional[WorkspacePath]:
        """
        Map an absolute file back to its workspace path.

        Returns None when the file lies outside this root. Purely lexical;
        symlinks are not followed.
        """
        try:
            relative = Path(file).relative_to(self.directory)
        except ValueError:
            return None
        relative_str = relative.as_posix()
        return WorkspacePath.create_if_valid("" if relative_str == "." else relative_str)

    def __str__(self) -> str:
        return str(self.directory)
