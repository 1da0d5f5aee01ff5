"""
xapk-input - XAPK split-APK package detection.

Checks whether a file is an XAPK archive (a zip with a ``manifest.json``
entry) and whether its manifest describes a supported package.
"""

__version__ = "0.1.0"

from xapk_input.xapk.manifest import SplitApk, XapkManifest  # noqa: E402
from xapk_input.xapk.utils import is_supported, load_manifest  # noqa: E402

__all__ = [
    "__version__",
    "SplitApk",
    "XapkManifest",
    "is_supported",
    "load_manifest",
]
