"""Multi-module project graph."""

from gradlite.project.graph import ProjectGraph, discover_project, find_settings, normalize_path, parse_settings

__all__ = ["ProjectGraph", "discover_project", "find_settings", "normalize_path", "parse_settings"]
