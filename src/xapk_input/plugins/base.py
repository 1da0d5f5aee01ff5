"""
Base input plugin protocol.

This module defines the interface that input format plugins implement to
integrate with the plugin registry.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from xapk_input.plugins.metadata import InputPluginMetadata
from xapk_input.plugins.types import ProbeResult


@runtime_checkable
class InputPlugin(Protocol):
    """
    Protocol for input format plugins.

    A plugin inspects a candidate file and reports whether it recognizes the
    format. The host tries plugins in priority order and skips to the next
    one when a probe is negative.
    """

    @property
    def metadata(self) -> InputPluginMetadata:
        """Plugin name, version, supported formats and priority."""
        ...

    def probe(self, file_path: Path) -> ProbeResult:
        """
        Check if this plugin can load the given file.

        Args:
            file_path: Path to the candidate input file

        Returns:
            ProbeResult with the decision, a confidence and reasons

        Note:
            This method should be fast and non-destructive. It should only
            read enough of the file to determine format compatibility.
        """
        ...
