"""
Input plugins and the registry that routes files to them.
"""

from xapk_input.plugins.base import InputPlugin
from xapk_input.plugins.metadata import InputPluginMetadata
from xapk_input.plugins.registry import InputPluginRegistry, get_default_registry
from xapk_input.plugins.types import DetectionResult, ProbeResult
from xapk_input.plugins.xapk import XapkInputPlugin

__all__ = [
    "InputPlugin",
    "InputPluginMetadata",
    "InputPluginRegistry",
    "get_default_registry",
    "DetectionResult",
    "ProbeResult",
    "XapkInputPlugin",
]
