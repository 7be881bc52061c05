"""gradlite: read, check, and resolve Kotlin DSL module manifests."""

from gradlite.errors import ManifestError, MalformedManifest, UnresolvedDependency, UnsupportedPlatform
from gradlite.manifest import ModuleDescriptor, parse_manifest, render_manifest, validate_descriptor
from gradlite.project import ProjectGraph, discover_project, parse_settings
from gradlite.resolver import Resolution, resolve_dependencies
from gradlite.testing import TestRunPlan, configure_test_run

__version__ = "0.1.0"

__all__ = [
    "ManifestError",
    "MalformedManifest",
    "UnresolvedDependency",
    "UnsupportedPlatform",
    "ModuleDescriptor",
    "ProjectGraph",
    "Resolution",
    "TestRunPlan",
    "parse_manifest",
    "render_manifest",
    "validate_descriptor",
    "parse_settings",
    "discover_project",
    "resolve_dependencies",
    "configure_test_run",
]
