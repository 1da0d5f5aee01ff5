"""Tests for input summaries."""

import hashlib
from pathlib import Path

import pytest

from xapk_input.summary import summarize_input
from xapk_input.xapk.utils import ManifestLoadFailure


class TestSummarizeInput:
    """Tests for summarize_input."""

    def test_supported_xapk(self, supported_xapk):
        summary = summarize_input(supported_xapk)

        assert summary.path == supported_xapk.resolve()
        assert summary.size == supported_xapk.stat().st_size
        assert summary.digests["sha256"] == hashlib.sha256(
            supported_xapk.read_bytes()
        ).hexdigest()
        assert summary.is_zip is True
        assert summary.is_supported is True
        assert summary.failure is None

    def test_plain_zip(self, make_zip):
        summary = summarize_input(make_zip({"a.txt": "x"}))

        assert summary.is_zip is True
        assert summary.manifest is None
        assert summary.failure is ManifestLoadFailure.MISSING_ENTRY
        assert summary.is_supported is False

    def test_not_zip(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_text("hello")

        summary = summarize_input(path)

        assert summary.is_zip is False
        assert summary.failure is ManifestLoadFailure.NOT_ZIP

    def test_unsupported_manifest(self, make_xapk):
        summary = summarize_input(make_xapk({"xapk_version": 1, "split_apks": [{}]}))

        assert summary.manifest is not None
        assert summary.is_supported is False

    def test_to_dict(self, supported_xapk):
        data = summarize_input(supported_xapk).to_dict()

        assert data["is_supported"] is True
        assert data["manifest"]["package_name"] == "com.example.app"
        assert set(data["digests"]) == {"md5", "sha1", "sha256"}
        assert "failure" not in data

    def test_to_dict_failure(self, make_zip):
        data = summarize_input(make_zip({"a.txt": "x"})).to_dict()

        assert data["failure"] == "missing_entry"
        assert "manifest" not in data

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            summarize_input(tmp_path / "missing.xapk")
