"""
Pytest configuration and fixtures for xapk-input tests.

Provides factories for building zip and XAPK archives on disk.
"""

import json
import logging
import zipfile
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from xapk_input.logging_config import PACKAGE_LOGGER
from xapk_input.plugins.registry import reset_default_registry

SPLIT_APKS = [
    {"file": "base.apk", "id": "base"},
    {"file": "config.arm64_v8a.apk", "id": "config.arm64_v8a"},
]


@pytest.fixture(autouse=True)
def reset_package_state():
    """Undo logging setup and drop the cached default registry."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    reset_default_registry()


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip with the given ``{name: content}`` entries."""

    def _make(
        entries: dict[str, str | bytes], name: str = "archive.zip"
    ) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry_name, content in entries.items():
                zf.writestr(entry_name, content)
        return path

    return _make


@pytest.fixture
def make_xapk(make_zip) -> Callable[..., Path]:
    """
    Factory writing an XAPK archive.

    ``manifest`` may be a dict (serialized to JSON), raw text, or None to
    leave the manifest entry out.
    """

    def _make(
        manifest: Optional[dict[str, Any] | str] = None,
        name: str = "app.xapk",
        manifest_name: str = "manifest.json",
        extra_entries: Optional[dict[str, str | bytes]] = None,
    ) -> Path:
        entries: dict[str, str | bytes] = {"base.apk": b"PK-base-apk"}
        if manifest is not None:
            body = manifest if isinstance(manifest, str) else json.dumps(manifest)
            entries[manifest_name] = body
        entries.update(extra_entries or {})
        return make_zip(entries, name=name)

    return _make


@pytest.fixture
def supported_manifest() -> dict[str, Any]:
    return {
        "xapk_version": 2,
        "package_name": "com.example.app",
        "name": "Example",
        "version_code": "42",
        "version_name": "1.4.2",
        "min_sdk_version": "24",
        "target_sdk_version": "34",
        "split_apks": SPLIT_APKS,
    }


@pytest.fixture
def supported_xapk(make_xapk, supported_manifest) -> Path:
    return make_xapk(supported_manifest)
