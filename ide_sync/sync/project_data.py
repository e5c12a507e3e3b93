"""
Project Data
============
Snapshot of the build information a project sync produced, plus the
manager that holds the current snapshot for the running service.

Sources (priority order):
    1. YAML project file (IDE_SYNC_PROJECT_FILE, default .ide-sync.yaml)
    2. IDE_SYNC_* environment variables

Project file format::

    execution_root: /home/me/.cache/bazel/_bazel_me/1a2b/execroot/my_ws
    workspace_root: .          # relative to the project file's directory
    build_system: bazel        # optional, detected from marker files if omitted
    package_paths:             # optional overlay roots
      - /srv/shared-sources

No execution root means no project data; ``ExecutionRootPathResolver.from_project``
then reports that no resolver is available.
"""
import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from ide_sync.buildsystem.detector import detect_build_system
from ide_sync.buildsystem.provider import default_build_system, get_build_system_provider
from ide_sync.models.primitives import WorkspaceRoot
from ide_sync.sync.workspace_path_resolver import (
    PackagePathWorkspacePathResolver,
    WorkspacePathResolver,
    WorkspacePathResolverImpl,
)

logger = logging.getLogger(__name__)


class ProjectData(BaseModel):
    model_config = ConfigDict(frozen=True)

    execution_root: Path
    workspace_root: Path
    build_system: Optional[str] = None
    package_paths: list[Path] = []

    @field_validator("execution_root", "workspace_root")
    @classmethod
    def must_be_absolute(cls, v: Path) -> Path:
        if not v.is_absolute():
            raise ValueError(f"Path must be absolute: {v}")
        return v

    def workspace(self) -> WorkspaceRoot:
        return WorkspaceRoot(self.workspace_root)

    def workspace_path_resolver(self) -> WorkspacePathResolver:
        if self.package_paths:
            return PackagePathWorkspacePathResolver(self.workspace(), self.package_paths)
        return WorkspacePathResolverImpl(self.workspace())

    def with_detected_build_system(self) -> "ProjectData":
        """Fill in a missing build system from the workspace marker files."""
        if self.build_system:
            return self
        detected = detect_build_system(self.workspace_root)
        if detected is None:
            return self
        logger.info("Detected build system %s in %s", detected, self.workspace_root)
        return self.model_copy(update={"build_system": detected})


def load_project_file(project_file: Union[str, Path]) -> Optional[ProjectData]:
    """
    Parse a YAML project file.

    Returns
    -------
    ProjectData | None
        None if the file does not exist, is empty, or names no execution root.

    Raises
    ------
    pydantic.ValidationError
        If the file's values are malformed (e.g. a relative execution root).
    yaml.YAMLError
        If the file is not valid YAML.
    """
    project_file = Path(project_file)
    if not project_file.is_file():
        return None

    with open(project_file, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        logger.warning("Ignoring project file %s: top level is not a mapping", project_file)
        return None
    if not raw.get("execution_root"):
        logger.info("Project file %s has no execution_root", project_file)
        return None

    base_dir = project_file.resolve().parent
    workspace_root = Path(os.path.expanduser(str(raw.get("workspace_root") or base_dir)))
    if not workspace_root.is_absolute():
        workspace_root = base_dir / workspace_root

    data = {
        "execution_root": os.path.expanduser(str(raw["execution_root"])),
        "workspace_root": workspace_root,
        "build_system": raw.get("build_system"),
        "package_paths": raw.get("package_paths") or [],
    }
    return ProjectData(**data).with_detected_build_system()


def load_project_data_from_env() -> Optional[ProjectData]:
    """Build project data from the IDE_SYNC_* settings in ide_sync.core.config."""
    from ide_sync.core import config

    if not config.EXECUTION_ROOT:
        return None
    data = {
        "execution_root": config.EXECUTION_ROOT,
        "workspace_root": config.WORKSPACE_ROOT,
        "build_system": config.BUILD_SYSTEM,
        "package_paths": config.PACKAGE_PATHS,
    }
    return ProjectData(**data).with_detected_build_system()


class ProjectDataManager:
    """
    Holds the current project data snapshot.

    Replacing the snapshot is a single reference assignment; resolvers built
    from an earlier snapshot keep their configuration.
    """

    def __init__(self, project_data: Optional[ProjectData] = None) -> None:
        self._project_data = project_data

    def get_project_data(self) -> Optional[ProjectData]:
        return self._project_data

    def set_project_data(self, project_data: Optional[ProjectData]) -> None:
        self._project_data = project_data
        if project_data is None:
            logger.info("Project data cleared")
        else:
            logger.info(
                "Project data updated: execution_root=%s workspace_root=%s build_system=%s",
                project_data.execution_root,
                project_data.workspace_root,
                project_data.build_system or "default",
            )
            if get_build_system_provider(project_data.build_system) is None:
                logger.info(
                    "No provider for build system %r — using %s defaults",
                    project_data.build_system, default_build_system().build_system.value,
                )

    def load(self, project_file: Union[str, Path, None] = None) -> Optional[ProjectData]:
        """Reload from the project file, falling back to environment settings."""
        from ide_sync.core import config

        project_data = load_project_file(project_file or config.PROJECT_FILE)
        if project_data is None:
            project_data = load_project_data_from_env()
        self.set_project_data(project_data)
        return project_data
