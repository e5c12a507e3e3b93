"""
Build System Provider
=====================
Maps a build system identity to the top-level directory names it creates
inside the workspace for build output (the convenience symlinks).

Paths whose first segment is one of these names point into the execution
root, not into the developer's sources.

Deterministic: same build system + workspace root → same directories, always.
Unknown identities fall back to the default (Bazel) provider.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ide_sync.models.primitives import WorkspaceRoot

logger = logging.getLogger(__name__)


class BuildSystem(str, Enum):
    BAZEL = "bazel"
    BLAZE = "blaze"


@dataclass(frozen=True)
class BuildSystemProvider:
    """
    Immutable description of one build system's output layout.

    Fields
    ------
    build_system : BuildSystem
        The identity this provider serves.
    symlink_prefix : str
        Prefix of the convenience symlinks (e.g. "bazel-").
    artifact_suffixes : tuple[str, ...]
        Symlink names after the prefix (e.g. "bin", "out").
    includes_workspace_symlink : bool
        True if the tool also creates "<prefix><workspace dir name>".
    """
    build_system: BuildSystem
    symlink_prefix: str
    artifact_suffixes: tuple[str, ...] = field(
        default=("bin", "genfiles", "out", "testlogs")
    )
    includes_workspace_symlink: bool = False

    def build_artifact_directories(self, workspace_root: WorkspaceRoot) -> frozenset[str]:
        """Return the top-level directory names denoting build output."""
        names = {self.symlink_prefix + suffix for suffix in self.artifact_suffixes}
        if self.includes_workspace_symlink and workspace_root.name:
            names.add(self.symlink_prefix + workspace_root.name)
        return frozenset(names)


# ---------------------------------------------------------------------------
# Provider mapping: build system → BuildSystemProvider
# ---------------------------------------------------------------------------
_PROVIDER_MAP: dict[BuildSystem, BuildSystemProvider] = {
    BuildSystem.BAZEL: BuildSystemProvider(
        build_system=BuildSystem.BAZEL,
        symlink_prefix="bazel-",
        includes_workspace_symlink=True,
    ),
    BuildSystem.BLAZE: BuildSystemProvider(
        build_system=BuildSystem.BLAZE,
        symlink_prefix="blaze-",
    ),
}


def get_build_system_provider(
    build_system: Union[BuildSystem, str, None],
) -> Optional[BuildSystemProvider]:
    """
    Look up the provider registered for a build system identity.

    Returns
    -------
    BuildSystemProvider | None
        None if the identity is None or not registered.
    """
    if build_system is None:
        return None
    try:
        key = BuildSystem(build_system)
    except ValueError:
        return None
    return _PROVIDER_MAP.get(key)


def default_build_system() -> BuildSystemProvider:
    return _PROVIDER_MAP[BuildSystem.BAZEL]


def build_artifact_directories(
    build_system: Union[BuildSystem, str, None],
    workspace_root: WorkspaceRoot,
) -> frozenset[str]:
    """
    Return the build-artifact directory names for ``build_system``.

    Falls back to the default provider when none is registered for the
    given identity; an unknown build system is not an error.
    """
    provider = get_build_system_provider(build_system)
    if provider is None:
        provider = default_build_system()
        logger.debug(
            "No provider for build system %r — using %s defaults",
            build_system, provider.build_system.value,
        )
    return provider.build_artifact_directories(workspace_root)


def get_supported_build_systems() -> list[str]:
    """Return all build system identities that have a registered provider."""
    return sorted(bs.value for bs in _PROVIDER_MAP)
