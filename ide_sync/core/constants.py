"""
Constants
Build-tool layout names shared by the resolver, providers and detector.
"""
# Top-level directory under which the build tool materializes external repositories
EXTERNAL_DIRECTORY = "external"

# Directory under the output base holding per-workspace execution roots
EXECROOT_DIRECTORY = "execroot"

# Workspace name used when the WORKSPACE file declares none
DEFAULT_WORKSPACE_NAME = "__main__"

# Legal workspace names: a letter followed by letters, digits, '-', '.', '_'
WORKSPACE_NAME_PATTERN = r"[A-Za-z][-.\w]*"

DEFAULT_PROJECT_FILE = ".ide-sync.yaml"
