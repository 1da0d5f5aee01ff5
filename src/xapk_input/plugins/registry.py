"""
Input plugin registry for auto-detecting input file formats.

The registry maintains a collection of input plugins and routes a candidate
file to the first plugin whose probe recognizes it. Plugins that reject a
file (or fail while probing) are skipped so the next format can be tried.
"""

import logging
from importlib import import_module
from pathlib import Path
from typing import Optional

from xapk_input.plugins.base import InputPlugin
from xapk_input.plugins.metadata import InputPluginMetadata
from xapk_input.plugins.types import DetectionResult, ProbeResult

logger = logging.getLogger(__name__)

# Entry point group for externally installed input plugins
ENTRY_POINT_GROUP = "xapk_input.plugins"


class InputPluginRegistry:
    """
    Registry for input plugins with format auto-detection.

    Example:
        >>> from xapk_input.plugins.xapk import XapkInputPlugin
        >>> registry = InputPluginRegistry()
        >>> registry.register(XapkInputPlugin())
        >>> detection = registry.detect(Path("app.xapk"))
    """

    def __init__(self) -> None:
        """Initialize an empty plugin registry."""
        self._plugins: list[InputPlugin] = []

    def register(self, plugin: InputPlugin) -> None:
        """
        Register a plugin implementation.

        Args:
            plugin: Plugin instance implementing the InputPlugin protocol

        Raises:
            TypeError: If the object does not implement the protocol
        """
        if not isinstance(plugin, InputPlugin):
            raise TypeError(
                f"{type(plugin).__name__} does not implement the InputPlugin protocol"
            )
        self._plugins.append(plugin)
        logger.debug(f"Registered input plugin: {type(plugin).__name__}")

    def _sorted_plugins(self, file_path: Path) -> list[InputPlugin]:
        """
        Order plugins using metadata priority and format support.

        Plugins that list supported formats but don't include this file
        extension are deprioritized. Ties keep registration order.
        """

        def score(plugin: InputPlugin) -> int:
            metadata: Optional[InputPluginMetadata] = getattr(plugin, "metadata", None)
            if metadata is None:
                return 50
            penalty = 0
            if not metadata.supports_format(file_path.suffix):
                # Penalize but still allow probe() to accept content-detected files
                penalty = -100
            return metadata.priority + penalty

        return sorted(self._plugins, key=score, reverse=True)

    def detect(self, file_path: Path) -> Optional[DetectionResult]:
        """
        Find the plugin that recognizes a file.

        Args:
            file_path: Path to the candidate input file

        Returns:
            DetectionResult for the first plugin with a positive probe, or
            None if the file doesn't exist or no plugin recognizes it
        """
        if not file_path.exists():
            return None

        attempts: list[str] = []

        for plugin in self._sorted_plugins(file_path):
            plugin_name = type(plugin).__name__
            try:
                probe: ProbeResult = plugin.probe(file_path)
            except Exception as probe_error:
                probe_msg = f"{plugin_name} probe failed: {probe_error}"
                attempts.append(probe_msg)
                logger.debug(probe_msg, exc_info=True)
                continue

            if not probe.can_load:
                reasons = "; ".join(probe.reasons) or "probe negative"
                attempts.append(f"{plugin_name} skipped ({reasons})")
                continue

            metadata = plugin.metadata
            return DetectionResult(
                plugin_name=metadata.name,
                plugin_version=metadata.version,
                probe=probe,
                attempts=attempts,
            )

        logger.debug(
            f"No input plugin recognized {file_path}: "
            f"{'; '.join(attempts) if attempts else 'no plugins registered'}"
        )
        return None

    def find_plugin(self, file_path: Path) -> Optional[InputPlugin]:
        """Return the plugin instance that would handle the file, if any."""
        detection = self.detect(file_path)
        if detection is None:
            return None
        for plugin in self._plugins:
            if plugin.metadata.name == detection.plugin_name:
                return plugin
        return None

    @property
    def registered_plugins(self) -> list[str]:
        """
        Get names of all registered plugins.

        Returns:
            List of plugin metadata names
        """
        return [plugin.metadata.name for plugin in self._plugins]


def _plugin_from_module(module_path: str) -> Optional[InputPlugin]:
    module = import_module(module_path)
    factory = getattr(module, "get_plugin", None)
    return factory() if callable(factory) else getattr(module, "PLUGIN", None)


def load_entry_point_plugins(registry: InputPluginRegistry) -> int:
    """
    Register plugins advertised through the ``xapk_input.plugins`` entry
    point group. Each entry point must resolve to a zero-argument factory.

    Returns:
        Number of plugins registered
    """
    from importlib.metadata import entry_points

    loaded = 0
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            factory = ep.load()
            registry.register(factory())
            loaded += 1
            logger.debug(f"Loaded entry point input plugin: {ep.name}")
        except Exception as e:
            logger.warning(f"Failed to load entry point {ep.name}: {e}")
    return loaded


# Global registry instance (singleton pattern)
_default_registry: Optional[InputPluginRegistry] = None


def get_default_registry() -> InputPluginRegistry:
    """
    Get the default global input plugin registry.

    The registry is lazy-initialized on first access and includes the
    built-in XAPK plugin, installed entry point plugins and any modules
    listed in the ``plugin_modules`` setting.

    Note:
        This is a singleton. Multiple calls return the same instance.
    """
    global _default_registry

    if _default_registry is None:
        from xapk_input.config import settings
        from xapk_input.plugins.xapk import XapkInputPlugin

        registry = InputPluginRegistry()
        registry.register(XapkInputPlugin())
        load_entry_point_plugins(registry)

        for module_path in settings.plugin_module_list:
            try:
                plugin = _plugin_from_module(module_path)
                if plugin:
                    registry.register(plugin)
                    logger.info(f"Loaded input plugin from {module_path}")
                else:
                    logger.warning(
                        f"Module {module_path} did not provide get_plugin()/PLUGIN"
                    )
            except Exception as import_error:
                logger.warning(
                    f"Failed to load plugin module {module_path}: {import_error}"
                )

        _default_registry = registry
        logger.debug("Initialized default input plugin registry")

    return _default_registry


def reset_default_registry() -> None:
    """Drop the cached default registry (used by tests)."""
    global _default_registry
    _default_registry = None
