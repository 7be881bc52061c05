"""Render a module descriptor back into canonical Kotlin DSL text."""

from __future__ import annotations

from gradlite.manifest.descriptor import (
    Dependency,
    ModuleCoordinate,
    ModuleDescriptor,
    PluginDeclaration,
    RepositoryDeclaration,
)
from gradlite.testing.registry import get_platform

_INDENT = "    "
_OPTION_CALLS = (
    ("include_tags", "includeTags"),
    ("exclude_tags", "excludeTags"),
    ("include_engines", "includeEngines"),
    ("exclude_engines", "excludeEngines"),
)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def _plugin_line(plugin: PluginDeclaration) -> str:
    line = f"id({_quote(plugin.id)})"
    if plugin.version:
        line += f" version {_quote(plugin.version)}"
    if not plugin.apply:
        line += " apply false"
    return line


def _repository_line(repo: RepositoryDeclaration) -> str:
    if repo.kind == "maven":
        return f"maven({_quote(repo.url or '')})"
    return f"{repo.kind}()"


def _dependency_lines(dep: Dependency) -> list[str]:
    coord = dep.coordinate
    if isinstance(coord, ModuleCoordinate):
        expr = _quote(coord.notation)
        if coord.platform:
            expr = f"{coord.platform}({expr})"
    else:
        expr = f"project({_quote(coord.path)})"
    head = f"{dep.configuration}({expr})"
    if not dep.excludes:
        return [head]
    lines = [head + " {"]
    for rule in dep.excludes:
        args = []
        if rule.group is not None:
            args.append(f"group = {_quote(rule.group)}")
        if rule.module is not None:
            args.append(f"module = {_quote(rule.module)}")
        lines.append(f"{_INDENT}exclude({', '.join(args)})")
    lines.append("}")
    return lines


def _block(name: str, lines: list[str]) -> list[str]:
    return [f"{name} {{", *(f"{_INDENT}{line}" for line in lines), "}"]


def render_manifest(descriptor: ModuleDescriptor) -> str:
    """Render descriptor as manifest text that parses back to an equal value.

    Extension blocks are only known by name and are not rendered.

    Example:
        >>> print(render_manifest(descriptor).splitlines()[0])
        plugins {
    """
    out: list[str] = []
    out += _block("plugins", [_plugin_line(p) for p in descriptor.plugins])
    out.append("")
    out.append(f"group = {_quote(descriptor.group)}")
    out.append(f"version = {_quote(descriptor.version)}")
    if descriptor.description is not None:
        out.append(f"description = {_quote(descriptor.description)}")
    out.append("")
    out += _block("repositories", [_repository_line(r) for r in descriptor.repositories])
    out.append("")
    dep_lines: list[str] = []
    for dep in descriptor.dependencies:
        dep_lines.extend(_dependency_lines(dep))
    out += _block("dependencies", dep_lines)

    test_cfg = descriptor.test_configuration
    if test_cfg.platform is not None:
        call = get_platform(test_cfg.platform).dsl_call
        option_lines = [
            f"{dsl}({', '.join(_quote(v) for v in getattr(test_cfg, attr))})"
            for attr, dsl in _OPTION_CALLS
            if getattr(test_cfg, attr)
        ]
        engine = _block(call, option_lines) if option_lines else [f"{call}()"]
        out.append("")
        out += _block("tasks.test", engine)
    return "\n".join(out) + "\n"
