"""
XAPK (split-APK package) detection.
"""

from xapk_input.xapk.manifest import SplitApk, XapkManifest
from xapk_input.xapk.utils import (
    ManifestLoadFailure,
    ManifestLoadResult,
    inspect_manifest,
    is_supported,
    load_manifest,
)

__all__ = [
    "SplitApk",
    "XapkManifest",
    "ManifestLoadFailure",
    "ManifestLoadResult",
    "inspect_manifest",
    "is_supported",
    "load_manifest",
]
