"""
Execution Root Path Resolver
============================
Converts execution-root-relative paths emitted by the build tool into
absolute files, with a minimum of filesystem calls (typically none).

Classification (first path segment only):
    - absolute path                        → returned as-is
    - build-artifact directory / "external" → rooted at the execution root,
                                              then stabilized
    - anything else                         → delegated to the workspace
                                              path resolver

Files that exist both underneath the execution root and within the workspace
resolve into the workspace, so they stay valid when a different target is
built.

Stabilization:
    External repositories appear under
        <output_base>/execroot/<workspace_name>/external/<repo>/...
    but <workspace_name> may change between builds while the repository
    content stays at
        <output_base>/external/<repo>/...
    The first form is rewritten to the second.

Instances are immutable after construction and safe to share across threads.
"""
import logging
import os
import re
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from ide_sync.buildsystem.provider import BuildSystem
from ide_sync.buildsystem.provider import build_artifact_directories as artifact_directories_for
from ide_sync.core.constants import (
    DEFAULT_WORKSPACE_NAME,
    EXECROOT_DIRECTORY,
    EXTERNAL_DIRECTORY,
    WORKSPACE_NAME_PATTERN,
)
from ide_sync.models.primitives import ExecutionRootPath, WorkspacePath, WorkspaceRoot
from ide_sync.sync.workspace_path_resolver import WorkspacePathResolver

logger = logging.getLogger(__name__)

_SEP = re.escape(os.sep)
_UNSTABLE_EXECROOT_SUBPATH = re.compile(
    _SEP + EXECROOT_DIRECTORY + _SEP
    + "(?:" + re.escape(DEFAULT_WORKSPACE_NAME) + "|" + WORKSPACE_NAME_PATTERN + ")"
    + _SEP + EXTERNAL_DIRECTORY + _SEP,
    re.ASCII,
)
_STABLE_EXTERNAL_SUBPATH = os.sep + EXTERNAL_DIRECTORY + os.sep


class PathKind(str, Enum):
    ABSOLUTE = "absolute"
    WORKSPACE = "workspace"
    EXTERNAL = "external"


def convert_external_to_stable(file: Union[str, Path]) -> Path:
    """
    Rewrite an unstable execroot external path to its stable location.

    Converts the first ``<sep>execroot<sep><name><sep>external<sep>`` in the
    absolute path to ``<sep>external<sep>``. Paths without that subpath are
    returned unchanged, so this is safe to call on every path.
    """
    absolute = str(Path(file).absolute())
    stable = _UNSTABLE_EXECROOT_SUBPATH.sub(
        lambda _match: _STABLE_EXTERNAL_SUBPATH, absolute, count=1
    )
    return Path(stable)


def _first_path_component(path: str) -> str:
    index = path.find(os.sep)
    return path if index == -1 else path[:index]


def _as_execution_root_path(path: Union[ExecutionRootPath, str, Path]) -> ExecutionRootPath:
    if isinstance(path, ExecutionRootPath):
        return path
    return ExecutionRootPath(path)


class ExecutionRootPathResolver:
    """
    Resolves execution-root-relative paths for one project-sync snapshot.

    Usage:
        resolver = ExecutionRootPathResolver.for_build_system(
            "bazel", workspace_root, execution_root, workspace_path_resolver
        )
        resolver.resolve_execution_root_path("bazel-out/k8-fastbuild/bin/a.h")
    """

    def __init__(
        self,
        build_artifact_directories: Iterable[str],
        execution_root: Union[str, Path],
        workspace_path_resolver: WorkspacePathResolver,
    ) -> None:
        self._build_artifact_directories = frozenset(build_artifact_directories)
        self._execution_root = Path(execution_root)
        self._workspace_path_resolver = workspace_path_resolver

    @classmethod
    def for_build_system(
        cls,
        build_system: Union[BuildSystem, str, None],
        workspace_root: WorkspaceRoot,
        execution_root: Union[str, Path],
        workspace_path_resolver: WorkspacePathResolver,
    ) -> "ExecutionRootPathResolver":
        """Derive the build-artifact directories from the build system provider."""
        return cls(
            artifact_directories_for(build_system, workspace_root),
            execution_root,
            workspace_path_resolver,
        )

    @classmethod
    def from_project(cls, project) -> Optional["ExecutionRootPathResolver"]:
        """
        Build a resolver from the project's current data.

        ``project`` is anything exposing ``get_project_data()`` (normally a
        ProjectDataManager). Returns None while no project data is available.
        """
        project_data = project.get_project_data()
        if project_data is None:
            return None
        return cls.for_build_system(
            project_data.build_system,
            project_data.workspace(),
            project_data.execution_root,
            project_data.workspace_path_resolver(),
        )

    @property
    def build_artifact_directories(self) -> frozenset[str]:
        return self._build_artifact_directories

    def get_execution_root(self) -> Path:
        return self._execution_root

    def classify(self, path: Union[ExecutionRootPath, str, Path]) -> PathKind:
        path = _as_execution_root_path(path)
        if path.is_absolute:
            return PathKind.ABSOLUTE
        if self._is_in_workspace(path):
            return PathKind.WORKSPACE
        return PathKind.EXTERNAL

    def resolve_execution_root_path(self, path: Union[ExecutionRootPath, str, Path]) -> Path:
        path = _as_execution_root_path(path)
        if path.is_absolute:
            return path.absolute_or_relative_file
        if self._is_in_workspace(path):
            return self._workspace_path_resolver.resolve_to_file(path.path_string)
        return convert_external_to_stable(path.file_rooted_at(self._execution_root))

    def resolve_to_include_directories(
        self, path: Union[ExecutionRootPath, str, Path]
    ) -> list[Path]:
        """
        Resolve a directory path, e.g. a header search path.

        Returns every workspace directory corresponding to the path. Paths
        outside the workspace (build output, external repositories) resolve
        to a single stabilized directory under the execution root. A workspace
        candidate that is not a valid workspace path yields an empty list.
        """
        path = _as_execution_root_path(path)
        if path.is_absolute:
            return [path.absolute_or_relative_file]
        if self._is_in_workspace(path):
            workspace_path = WorkspacePath.create_if_valid(path.path_string)
            if workspace_path is None:
                logger.debug("Skipping malformed include directory %r", path.path_string)
                return []
            return self._workspace_path_resolver.resolve_to_include_directories(workspace_path)
        return [convert_external_to_stable(path.file_rooted_at(self._execution_root))]

    def _is_in_workspace(self, path: ExecutionRootPath) -> bool:
        first_component = _first_path_component(path.path_string)
        return (
            first_component not in self._build_artifact_directories
            and first_component != EXTERNAL_DIRECTORY
        )
