"""
Version management utilities for the bill text extractor.

This module provides the version number and detailed build information,
including the git commit when git is available.
"""

import subprocess
import sys
from pathlib import Path
from typing import Optional


# Base version - this is the only place you need to update the version number
BASE_VERSION = "1.0.0"


def _run_git(*args: str) -> Optional[str]:
    """Run a git command in the repository root, returning its output or None."""
    try:
        repo_root = Path(__file__).parent.parent
        result = subprocess.run(
            ["git", *args],
            cwd=repo_root,
            capture_output=True,
            text=True,
            timeout=5
        )
        if result.returncode == 0:
            return result.stdout.strip()
        return None
    except (subprocess.TimeoutExpired, subprocess.SubprocessError, FileNotFoundError, OSError):
        return None


def get_git_commit_hash(short: bool = True) -> Optional[str]:
    """
    Get the current git commit hash.

    Args:
        short: If True, return short hash (7 chars), otherwise full hash

    Returns:
        Git commit hash string or None if not available
    """
    if short:
        return _run_git("rev-parse", "--short", "HEAD")
    return _run_git("rev-parse", "HEAD")


def get_version() -> str:
    """
    Get the version string.

    The same value is declared as the package version, so the CLI and the
    installed distribution always agree.

    Returns:
        Version string in format: MAJOR.MINOR.PATCH
    """
    return BASE_VERSION


def get_version_info() -> dict:
    """
    Get comprehensive version information.

    Returns:
        Dictionary containing version details
    """
    commit_hash = get_git_commit_hash(short=True)
    return {
        "version": get_version(),
        "base_version": BASE_VERSION,
        "commit_hash": commit_hash,
        "python_version": sys.version.split()[0],
        "git_available": commit_hash is not None
    }


__version__ = BASE_VERSION
