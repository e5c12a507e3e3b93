"""
Unit Tests — Build System Providers and Detection
=================================================
Artifact directory lists per build system, default-provider fallback and
marker-file detection.
"""
import logging

import pytest

from ide_sync.buildsystem.detector import MARKER_MAP, detect_all_markers, detect_build_system
from ide_sync.buildsystem.provider import (
    BuildSystem,
    build_artifact_directories,
    default_build_system,
    get_build_system_provider,
    get_supported_build_systems,
)
from ide_sync.models.primitives import WorkspaceRoot

WORKSPACE = WorkspaceRoot("/home/dev/myrepo")


# ---------------------------------------------------------------------------
# 1. Providers
# ---------------------------------------------------------------------------
class TestBuildSystemProvider:

    def test_bazel_directories(self):
        assert build_artifact_directories("bazel", WORKSPACE) == frozenset({
            "bazel-bin", "bazel-genfiles", "bazel-out", "bazel-testlogs", "bazel-myrepo",
        })

    def test_blaze_directories(self):
        assert build_artifact_directories(BuildSystem.BLAZE, WORKSPACE) == frozenset({
            "blaze-bin", "blaze-genfiles", "blaze-out", "blaze-testlogs",
        })

    def test_lookup_by_enum_and_string(self):
        assert get_build_system_provider("bazel") is get_build_system_provider(BuildSystem.BAZEL)

    def test_unknown_lookup_returns_none(self):
        assert get_build_system_provider("pants") is None
        assert get_build_system_provider(None) is None

    def test_unknown_falls_back_to_default(self):
        assert build_artifact_directories("pants", WORKSPACE) == build_artifact_directories(
            "bazel", WORKSPACE
        )
        assert build_artifact_directories(None, WORKSPACE) == build_artifact_directories(
            "bazel", WORKSPACE
        )

    def test_fallback_is_not_logged_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="ide_sync.buildsystem.provider"):
            for _ in range(3):
                build_artifact_directories(None, WORKSPACE)
        assert caplog.records == []

    def test_default_is_bazel(self):
        assert default_build_system().build_system == BuildSystem.BAZEL

    def test_provider_is_frozen(self):
        provider = default_build_system()
        with pytest.raises(AttributeError):
            provider.symlink_prefix = "x-"

    def test_supported_build_systems(self):
        assert get_supported_build_systems() == ["bazel", "blaze"]


# ---------------------------------------------------------------------------
# 2. Detection
# ---------------------------------------------------------------------------
class TestBuildSystemDetector:

    def test_detect_bazel_from_module(self, tmp_path):
        (tmp_path / "MODULE.bazel").write_text("module(name = 'x')\n")
        assert detect_build_system(tmp_path) == "bazel"

    def test_detect_bazel_from_workspace(self, tmp_path):
        (tmp_path / "WORKSPACE").write_text("workspace(name = 'x')\n")
        assert detect_build_system(str(tmp_path)) == "bazel"

    def test_detect_blaze(self, tmp_path):
        (tmp_path / ".blazerc").write_text("build --foo\n")
        assert detect_build_system(tmp_path) == "blaze"

    def test_priority_bazel_over_blaze(self, tmp_path):
        (tmp_path / ".blazerc").write_text("")
        (tmp_path / "WORKSPACE").write_text("")
        assert detect_build_system(tmp_path) == "bazel"

    def test_returns_none_for_empty_dir(self, tmp_path):
        assert detect_build_system(tmp_path) is None

    def test_returns_none_for_nonexistent_dir(self):
        assert detect_build_system("/nonexistent/path/xyz") is None

    def test_directory_named_like_marker_ignored(self, tmp_path):
        (tmp_path / "WORKSPACE").mkdir()
        assert detect_build_system(tmp_path) is None

    def test_detect_all_markers(self, tmp_path):
        (tmp_path / "WORKSPACE").write_text("")
        (tmp_path / ".bazelrc").write_text("")
        assert detect_all_markers(tmp_path) == ["WORKSPACE", ".bazelrc"]

    def test_detect_all_markers_empty(self, tmp_path):
        assert detect_all_markers(tmp_path) == []

    def test_every_marker_maps_to_supported_system(self):
        supported = set(get_supported_build_systems())
        assert {bs for _, bs in MARKER_MAP} <= supported
