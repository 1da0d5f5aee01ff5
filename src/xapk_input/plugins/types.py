"""
Shared input plugin result types.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ProbeResult:
    """
    Lightweight capability probe result for plugin selection.

    Attributes:
        can_load: Whether the plugin believes it can load the file.
        confidence: 0.0-1.0 confidence score for selection ordering.
        reasons: Human-readable hints for observability/debugging.
    """

    can_load: bool
    confidence: float = 0.5
    reasons: List[str] = field(default_factory=list)


@dataclass
class DetectionResult:
    """
    Plugin chosen by the registry for a file.

    Attributes:
        plugin_name: Identifier from the plugin metadata.
        plugin_version: Version string from the plugin metadata.
        probe: The positive probe that selected the plugin.
        attempts: Messages from plugins tried before this one.
    """

    plugin_name: str
    plugin_version: Optional[str]
    probe: ProbeResult
    attempts: List[str] = field(default_factory=list)
