"""
XAPK input plugin.

Recognizes split-APK packages (zip archives with a version 2
``manifest.json`` listing at least one split APK).
"""

import logging
from pathlib import Path
from typing import Optional

from xapk_input import __version__
from xapk_input.plugins.metadata import InputPluginMetadata
from xapk_input.plugins.types import ProbeResult
from xapk_input.xapk.manifest import XapkManifest
from xapk_input.xapk.utils import inspect_manifest, is_supported

logger = logging.getLogger(__name__)


class XapkInputPlugin:
    """Input plugin for XAPK split-APK packages."""

    def __init__(self) -> None:
        self._metadata = InputPluginMetadata(
            name="xapk-input",
            version=__version__,
            supported_formats=[".xapk", ".apkm", ".zip"],
            priority=60,
            description="Split APK packages described by an XAPK manifest.json",
        )

    @property
    def metadata(self) -> InputPluginMetadata:
        return self._metadata

    def probe(self, file_path: Path) -> ProbeResult:
        result = inspect_manifest(file_path)
        manifest = result.manifest
        if manifest is None:
            assert result.failure is not None
            return ProbeResult(
                can_load=False,
                confidence=0.0,
                reasons=[f"{result.failure.value}: {result.detail}"],
            )

        if not is_supported(manifest):
            return ProbeResult(
                can_load=False,
                confidence=0.2,
                reasons=[
                    f"unsupported manifest: xapk_version={manifest.xapk_version}, "
                    f"split_apks={len(manifest.split_apks)}"
                ],
            )

        return ProbeResult(
            can_load=True,
            confidence=0.9,
            reasons=[
                f"xapk_version={manifest.xapk_version}",
                f"{len(manifest.split_apks)} split APK(s)",
            ],
        )

    def load_manifest(self, file_path: Path) -> Optional[XapkManifest]:
        """Return the manifest only if the package is supported."""
        manifest = inspect_manifest(file_path).manifest
        if manifest is None or not is_supported(manifest):
            return None
        logger.debug(
            f"Loaded XAPK manifest for {manifest.package_name or file_path}"
        )
        return manifest


def get_plugin() -> XapkInputPlugin:
    """Factory used by the default registry and plugin module loading."""
    return XapkInputPlugin()
