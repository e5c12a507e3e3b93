"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    IDE_SYNC_EXECUTION_ROOT  — Absolute execution root reported by the build tool
    IDE_SYNC_WORKSPACE_ROOT  — Developer workspace root (default: current directory)
    IDE_SYNC_BUILD_SYSTEM    — "bazel" or "blaze" (default: detected from marker files)
    IDE_SYNC_PACKAGE_PATHS   — Extra source roots overlaid on the workspace,
                               separated by os.pathsep
    IDE_SYNC_PROJECT_FILE    — YAML project file (default: .ide-sync.yaml)
    LOG_LEVEL                — Root logging level (default: INFO)
    LOG_DIR                  — Directory for the dated log file (default: logs,
                               empty string disables file logging)

Precedence:
    A project file that exists on disk wins over the IDE_SYNC_* variables.
    Without either an execution root, there is no project data and therefore
    no resolver; that is reported to callers, never raised.
"""
import os
from dotenv import load_dotenv

from ide_sync.core.constants import DEFAULT_PROJECT_FILE

load_dotenv()

EXECUTION_ROOT = os.getenv("IDE_SYNC_EXECUTION_ROOT", "")
WORKSPACE_ROOT = os.getenv("IDE_SYNC_WORKSPACE_ROOT", os.getcwd())
BUILD_SYSTEM = os.getenv("IDE_SYNC_BUILD_SYSTEM") or None
PACKAGE_PATHS: list[str] = [
    p for p in os.getenv("IDE_SYNC_PACKAGE_PATHS", "").split(os.pathsep) if p
]
PROJECT_FILE = os.getenv("IDE_SYNC_PROJECT_FILE", DEFAULT_PROJECT_FILE)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
