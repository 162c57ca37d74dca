"""
Kanban Flow Simulator Version Information

This module provides centralized version management for the Kanban Flow Simulator.
Follow Semantic Versioning 2.0.0 (https://semver.org/)

Version format: MAJOR.MINOR.PATCH
- MAJOR: Incompatible changes to the persisted board format or the session API
- MINOR: New commands, policies or storage backends in a backwards-compatible manner
- PATCH: Backwards-compatible bug fixes

Version History:
- 1.0.0: Initial release
  - Seven-stage pipeline with WIP-limit gating
  - siloted-expert autonomous policy with cooperative cancellation
  - Bounded undo/redo history
  - Schema-validated save/autosave and JSON import/export
"""

from __future__ import annotations

__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Release metadata
__release_date__ = "2026-10-18"
__release_name__ = "Kanban Flow Simulator"

# Git information (can be populated by CI/CD or build scripts)
__git_sha__ = None
__git_branch__ = None

def get_version() -> str:
    """Get the current version string."""
    return __version__

def get_version_info() -> tuple[int, int, int]:
    """Get version as a tuple of integers (major, minor, patch)."""
    return __version_info__

def get_full_version() -> str:
    """Get full version string including git info if available."""
    version = __version__
    if __git_sha__:
        version += f"+{__git_sha__[:7]}"
    return version

def get_version_dict() -> dict[str, str | tuple[int, int, int] | None]:
    """Get version information as a dictionary."""
    return {
        "version": __version__,
        "version_info": __version_info__,
        "release_date": __release_date__,
        "release_name": __release_name__,
        "git_sha": __git_sha__,
        "git_branch": __git_branch__,
    }
