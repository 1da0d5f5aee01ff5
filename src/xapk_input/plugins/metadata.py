"""
Input plugin metadata definitions.

This module defines the metadata structure that input plugins use to declare
their name, version, supported formats and selection priority.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class InputPluginMetadata:
    """
    Metadata about an input plugin implementation.

    Attributes:
        name: Plugin identifier (e.g., 'xapk-input')
        version: Plugin version using semantic versioning (e.g., '1.0.0')
        supported_formats: File extensions supported (e.g., ['.xapk', '.zip'])
        priority: Selection priority (0-100, higher = preferred). Used when
                  multiple plugins can handle the same format.
        description: Optional human-readable description

    Example:
        >>> metadata = InputPluginMetadata(
        ...     name="xapk-input",
        ...     version="1.0.0",
        ...     supported_formats=["xapk", ".ZIP"],
        ...     priority=75,
        ... )
        >>> metadata.supported_formats
        ['.xapk', '.zip']
    """

    name: str
    version: str
    supported_formats: List[str] = field(default_factory=list)
    priority: int = 50
    description: str = ""

    def __post_init__(self) -> None:
        """Validate metadata after initialization."""
        if not self.name:
            raise ValueError("Plugin name cannot be empty")

        if not self.version:
            raise ValueError("Plugin version cannot be empty")

        if not self.supported_formats:
            raise ValueError("Plugin must support at least one format")

        if not 0 <= self.priority <= 100:
            raise ValueError("Priority must be between 0 and 100")

        self.supported_formats = [
            self._normalize(fmt) for fmt in self.supported_formats
        ]

    @staticmethod
    def _normalize(extension: str) -> str:
        if not extension.startswith("."):
            extension = f".{extension}"
        return extension.lower()

    def supports_format(self, extension: str) -> bool:
        """
        Check if the plugin supports a given file extension.

        Args:
            extension: File extension to check (e.g., '.xapk' or 'xapk')
        """
        return self._normalize(extension) in self.supported_formats
