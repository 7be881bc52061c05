"""Registry helpers for known build plugins."""

from __future__ import annotations

from gradlite.plugins.base import PluginSpec

_PLUGINS: dict[str, PluginSpec] = {}


def register_plugin(spec: PluginSpec) -> None:
    """Register a plugin specification by its id.

    Example:
        >>> register_plugin(spec)
    """
    key = spec.id.strip().lower()
    if not key:
        raise ValueError("plugin id cannot be empty")
    _PLUGINS[key] = spec


def get_plugin(plugin_id: str) -> PluginSpec:
    """Return plugin specification by id.

    Example:
        >>> java = get_plugin("java")
    """
    key = plugin_id.strip().lower()
    if key not in _PLUGINS:
        available = ", ".join(sorted(_PLUGINS)) or "<none>"
        raise KeyError(f"Unknown plugin '{plugin_id}'. Registered: {available}")
    return _PLUGINS[key]


def is_known_plugin(plugin_id: str) -> bool:
    return plugin_id.strip().lower() in _PLUGINS


def list_plugins() -> tuple[str, ...]:
    """List registered plugin ids.

    Example:
        >>> ids = list_plugins()
    """
    return tuple(sorted(_PLUGINS))


def configurations_for(plugin_ids: tuple[str, ...]) -> frozenset[str]:
    """Collect dependency configurations contributed by plugins and what they imply.

    Example:
        >>> "api" in configurations_for(("java-library",))
        True
    """
    seen: set[str] = set()
    configurations: set[str] = set()
    pending = list(plugin_ids)
    while pending:
        spec = get_plugin(pending.pop())
        if spec.id in seen:
            continue
        seen.add(spec.id)
        configurations.update(spec.configurations)
        pending.extend(spec.implies)
    return frozenset(configurations)
