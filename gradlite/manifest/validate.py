"""Cross-field checks that need the plugin registry."""

from __future__ import annotations

import logging

from gradlite.errors import MalformedManifest
from gradlite.manifest.descriptor import ModuleDescriptor
from gradlite.plugins import configurations_for, is_known_plugin

_LOG = logging.getLogger(__name__)


def validate_descriptor(descriptor: ModuleDescriptor) -> None:
    """Check that every dependency configuration comes from an applied plugin.

    The check is skipped when an applied plugin is not in the registry, since
    its contributed configurations are unknown.

    Example:
        >>> validate_descriptor(parse_manifest(text))
    """
    applied = descriptor.plugin_ids
    unknown = [p for p in applied if not is_known_plugin(p)]
    if unknown:
        _LOG.debug("skipping configuration check, unknown plugins: %s", ", ".join(unknown))
        return
    available = configurations_for(applied)
    for dep in descriptor.dependencies:
        if dep.configuration not in available:
            plugins = ", ".join(applied) or "<none>"
            raise MalformedManifest(
                f"configuration '{dep.configuration}' is not provided by applied plugins ({plugins})"
            )
