"""
Kanban Flow Simulator CLI Package

A Rich-based CLI over the simulation engine: inspect the board, move cards,
manage workers and WIP limits, and run the autonomous policy.
"""

from .main import app
from _version import __version__, get_full_version, get_version_dict

__all__ = ["app", "__version__", "get_full_version", "get_version_dict"]
