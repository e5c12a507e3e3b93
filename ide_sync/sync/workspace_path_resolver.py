"""
Workspace Path Resolver
=======================
Maps workspace-relative paths to real files.

Two implementations:
    WorkspacePathResolverImpl         — single workspace root, no I/O
    PackagePathWorkspacePathResolver  — several source roots overlaid on the
                                        workspace; checks which root holds a
                                        path, so it does touch the filesystem
"""
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from ide_sync.models.primitives import WorkspacePath, WorkspaceRoot

logger = logging.getLogger(__name__)


class WorkspacePathResolver(ABC):
    """Capability consumed by the execution root path resolver."""

    @abstractmethod
    def resolve_to_file(self, path: Union[str, WorkspacePath]) -> Path:
        """Resolve a workspace-relative path to a file. Existence is not guaranteed."""

    @abstractmethod
    def resolve_to_include_directories(self, path: WorkspacePath) -> list[Path]:
        """Return every real directory corresponding to ``path``."""

    @abstractmethod
    def workspace_path_for(self, file: Union[str, Path]) -> Optional[WorkspacePath]:
        """Map an absolute file back to a workspace path, or None if outside."""


class WorkspacePathResolverImpl(WorkspacePathResolver):
    """Resolves against a single workspace root."""

    def __init__(self, workspace_root: WorkspaceRoot) -> None:
        self.workspace_root = workspace_root

    def resolve_to_file(self, path: Union[str, WorkspacePath]) -> Path:
        if isinstance(path, WorkspacePath):
            return self.workspace_root.file_for_path(path)
        return self.workspace_root.directory / path

    def resolve_to_include_directories(self, path: WorkspacePath) -> list[Path]:
        return [self.workspace_root.file_for_path(path)]

    def workspace_path_for(self, file: Union[str, Path]) -> Optional[WorkspacePath]:
        return self.workspace_root.workspace_path_for(file)


class PackagePathWorkspacePathResolver(WorkspacePathResolver):
    """
    Resolves against the workspace root plus additional package-path roots.

    The workspace root is always the primary root. Lookups prefer the first
    root (in order) where the path exists, and fall back to the primary root
    so callers still get a well-formed path for files not yet built or checked
    out.
    """

    def __init__(
        self,
        workspace_root: WorkspaceRoot,
        package_paths: Sequence[Union[str, Path]] = (),
    ) -> None:
        self.workspace_root = workspace_root
        roots = [workspace_root.directory]
        for package_path in package_paths:
            root = Path(package_path)
            if root not in roots:
                roots.append(root)
        self.roots: tuple[Path, ...] = tuple(roots)

    def _relative(self, path: Union[str, WorkspacePath]) -> str:
        if isinstance(path, WorkspacePath):
            return "" if path.is_workspace_root() else path.relative_path
        return str(path)

    def resolve_to_file(self, path: Union[str, WorkspacePath]) -> Path:
        relative = self._relative(path)
        for root in self.roots:
            candidate = root / relative
            if os.path.exists(candidate):
                return candidate
        return self.roots[0] / relative

    def resolve_to_include_directories(self, path: WorkspacePath) -> list[Path]:
        relative = self._relative(path)
        found = [root / relative for root in self.roots if os.path.isdir(root / relative)]
        if not found:
            logger.debug("No package path root holds %r; using primary root", relative)
            return [self.roots[0] / relative]
        return found

    def workspace_path_for(self, file: Union[str, Path]) -> Optional[WorkspacePath]:
        for root in self.roots:
            workspace_path = WorkspaceRoot(root).workspace_path_for(file)
            if workspace_path is not None:
                return workspace_path
        return None
