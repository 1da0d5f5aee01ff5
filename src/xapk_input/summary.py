"""
Input file summary.

Collects the facts shown for an input file: canonical location, size,
digests and what the XAPK check made of it.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from xapk_input.archive.zip_archive import is_zip_file
from xapk_input.utils.hashing import calculate_file_digests
from xapk_input.xapk.manifest import XapkManifest
from xapk_input.xapk.utils import ManifestLoadFailure, inspect_manifest, is_supported

logger = logging.getLogger(__name__)


@dataclass
class InputSummary:
    """Summary of one input file."""

    path: Path
    size: int
    digests: dict[str, str] = field(default_factory=dict)
    is_zip: bool = False
    manifest: Optional[XapkManifest] = None
    failure: Optional[ManifestLoadFailure] = None
    failure_detail: str = ""

    @property
    def is_supported(self) -> bool:
        return self.manifest is not None and is_supported(self.manifest)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: dict[str, Any] = {
            "path": str(self.path),
            "size": self.size,
            "digests": dict(self.digests),
            "is_zip": self.is_zip,
            "is_supported": self.is_supported,
        }
        if self.manifest is not None:
            result["manifest"] = self.manifest.model_dump(mode="json")
        if self.failure is not None:
            result["failure"] = self.failure.value
            result["failure_detail"] = self.failure_detail
        return result


def summarize_input(file_path: Path | str) -> InputSummary:
    """
    Build the summary of an input file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the path is not a regular file
    """
    file_path = Path(file_path)
    digests = calculate_file_digests(file_path)
    canonical = file_path.resolve()
    load = inspect_manifest(canonical)

    logger.debug(f"Summarized {canonical}: loaded={load.loaded}")
    return InputSummary(
        path=canonical,
        size=canonical.stat().st_size,
        digests=digests,
        is_zip=is_zip_file(canonical),
        manifest=load.manifest,
        failure=load.failure,
        failure_detail=load.detail,
    )
