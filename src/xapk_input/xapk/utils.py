"""
XAPK manifest loading and support check.

``load_manifest`` returns the parsed manifest of an XAPK archive or None when
the file cannot be used for any reason; ``inspect_manifest`` exposes the
reason for diagnostics without changing that contract.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from xapk_input.archive.security import open_entry_stream
from xapk_input.archive.zip_archive import ZipArchive, is_zip_file
from xapk_input.exceptions import ZipSecurityError
from xapk_input.xapk.manifest import XapkManifest

logger = logging.getLogger(__name__)

MANIFEST_ENTRY_NAME = "manifest.json"
SUPPORTED_XAPK_VERSION = 2


class ManifestLoadFailure(str, Enum):
    """Why a manifest could not be loaded."""

    NOT_ZIP = "not_zip"
    MISSING_ENTRY = "missing_entry"
    UNSAFE_ENTRY = "unsafe_entry"
    MALFORMED_MANIFEST = "malformed_manifest"
    READ_ERROR = "read_error"


@dataclass(frozen=True)
class ManifestLoadResult:
    """
    Outcome of a manifest load.

    Exactly one of ``manifest`` and ``failure`` is set.
    """

    manifest: Optional[XapkManifest] = None
    failure: Optional[ManifestLoadFailure] = None
    detail: str = ""

    @property
    def loaded(self) -> bool:
        return self.manifest is not None


def _failed(
    file_path: Path, failure: ManifestLoadFailure, detail: str
) -> ManifestLoadResult:
    logger.debug(f"No XAPK manifest in {file_path}: {failure.value} ({detail})")
    return ManifestLoadResult(failure=failure, detail=detail)


def inspect_manifest(file_path: Path | str) -> ManifestLoadResult:
    """
    Load the XAPK manifest of a file, reporting why it failed if it did.

    Never raises.
    """
    file_path = Path(file_path)
    if not is_zip_file(file_path):
        return _failed(file_path, ManifestLoadFailure.NOT_ZIP, "not a zip archive")

    try:
        with ZipArchive.open(file_path) as archive:
            entry = archive.get_entry(MANIFEST_ENTRY_NAME)
            if entry is None:
                return _failed(
                    file_path,
                    ManifestLoadFailure.MISSING_ENTRY,
                    f"no '{MANIFEST_ENTRY_NAME}' entry",
                )
            with open_entry_stream(archive, entry) as stream:
                manifest = XapkManifest.from_json(stream.read())
    except ZipSecurityError as e:
        return _failed(file_path, ManifestLoadFailure.UNSAFE_ENTRY, str(e))
    except ValidationError as e:
        return _failed(
            file_path,
            ManifestLoadFailure.MALFORMED_MANIFEST,
            f"{e.error_count()} validation error(s)",
        )
    except Exception as e:
        return _failed(file_path, ManifestLoadFailure.READ_ERROR, repr(e))

    return ManifestLoadResult(manifest=manifest)


def load_manifest(file_path: Path | str) -> Optional[XapkManifest]:
    """
    Load the XAPK manifest of a file.

    Args:
        file_path: Candidate archive; the extension is not checked

    Returns:
        Parsed manifest, or None if the file is not a zip, has no
        ``manifest.json`` entry, the entry is unsafe, the JSON is malformed
        or reading fails
    """
    return inspect_manifest(file_path).manifest


def is_supported(manifest: XapkManifest) -> bool:
    """Check that the manifest is XAPK version 2 with at least one split APK."""
    return (
        manifest.xapk_version == SUPPORTED_XAPK_VERSION
        and len(manifest.split_apks) > 0
    )
