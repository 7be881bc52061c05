"""Module manifest model, parser, renderer, and validation."""

from gradlite.manifest.descriptor import (
    Coordinate,
    Dependency,
    ExcludeRule,
    ModuleCoordinate,
    ModuleDescriptor,
    PluginDeclaration,
    ProjectCoordinate,
    RepositoryDeclaration,
    Scope,
    TestConfiguration,
)
from gradlite.manifest.parser import parse_coordinate_notation, parse_manifest
from gradlite.manifest.validate import validate_descriptor
from gradlite.manifest.writer import render_manifest

__all__ = [
    "Coordinate",
    "Dependency",
    "ExcludeRule",
    "ModuleCoordinate",
    "ModuleDescriptor",
    "PluginDeclaration",
    "ProjectCoordinate",
    "RepositoryDeclaration",
    "Scope",
    "TestConfiguration",
    "parse_coordinate_notation",
    "parse_manifest",
    "render_manifest",
    "validate_descriptor",
]
