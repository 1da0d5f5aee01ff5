"""Tests for zip entry security checks."""

from pathlib import Path

import pytest

from xapk_input.archive import security
from xapk_input.archive.security import (
    is_in_subdirectory,
    is_valid_entry,
    is_valid_entry_name,
    is_zip_bomb,
    open_entry_stream,
    read_zip_entries,
    visit_zip_entries,
    visit_zip_entries_with_cond,
)
from xapk_input.archive.zip_archive import ZipArchive, ZipArchiveEntry
from xapk_input.config import settings
from xapk_input.exceptions import (
    UnsafeZipEntryError,
    ZipEntriesLimitError,
    ZipEntrySizeExceededError,
    ZipProcessingError,
)

MB = 1024 * 1024


@pytest.fixture
def checks_disabled(monkeypatch):
    monkeypatch.setattr(settings, "zip_security_disabled", True)


class TestEntryNames:
    """Tests for is_valid_entry_name."""

    @pytest.mark.parametrize(
        "name",
        ["manifest.json", "base.apk", "assets/icon.png", "dir/", "./base.apk"],
    )
    def test_valid_names(self, name):
        assert is_valid_entry_name(name) is True

    @pytest.mark.parametrize(
        "name",
        [
            "../manifest.json",
            "../../etc/passwd",
            "assets/../../escape.txt",
            "..\\windows\\evil.dll",
        ],
    )
    def test_traversal_rejected(self, name):
        assert is_valid_entry_name(name) is False

    def test_absolute_name_rejected(self):
        assert is_valid_entry_name("/etc/passwd") is False

    def test_bare_parent_rejected(self):
        assert is_valid_entry_name("..") is False

    def test_double_dots_in_file_name_allowed(self):
        assert is_valid_entry_name("notes..txt") is True

    def test_checks_disabled(self, checks_disabled):
        assert is_valid_entry_name("../manifest.json") is True


class TestIsInSubdirectory:
    """Tests for is_in_subdirectory."""

    def test_child(self, tmp_path: Path):
        assert is_in_subdirectory(tmp_path, tmp_path / "a" / "b.txt") is True

    def test_same_directory(self, tmp_path: Path):
        assert is_in_subdirectory(tmp_path, tmp_path) is True

    def test_escape(self, tmp_path: Path):
        assert is_in_subdirectory(tmp_path / "a", tmp_path / "a" / ".." / "b") is False

    def test_sibling_with_common_prefix(self, tmp_path: Path):
        assert is_in_subdirectory(tmp_path / "out", tmp_path / "output") is False


class TestZipBomb:
    """Tests for is_zip_bomb."""

    def test_small_entry_is_safe(self):
        entry = ZipArchiveEntry(name="a.txt", size=10 * MB, compressed_size=1)

        assert is_zip_bomb(entry) is False

    def test_large_entry_with_sane_ratio(self):
        entry = ZipArchiveEntry(name="a.bin", size=30 * MB, compressed_size=20 * MB)

        assert is_zip_bomb(entry) is False

    def test_large_entry_with_huge_ratio(self):
        entry = ZipArchiveEntry(name="bomb.bin", size=30 * MB, compressed_size=1024)

        assert is_zip_bomb(entry) is True

    def test_negative_sizes(self):
        entry = ZipArchiveEntry(name="a.txt", size=-1, compressed_size=10)

        assert is_zip_bomb(entry) is True

    def test_thresholds_come_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "zip_bomb_min_uncompressed_size", 1000)
        monkeypatch.setattr(settings, "zip_bomb_detection_factor", 10)
        entry = ZipArchiveEntry(name="a.txt", size=2000, compressed_size=100)

        assert is_zip_bomb(entry) is True

    def test_is_valid_entry(self):
        good = ZipArchiveEntry(name="a.txt", size=5, compressed_size=5)
        bad_name = ZipArchiveEntry(name="../a.txt", size=5, compressed_size=5)
        bomb = ZipArchiveEntry(name="a.bin", size=30 * MB, compressed_size=1)

        assert is_valid_entry(good) is True
        assert is_valid_entry(bad_name) is False
        assert is_valid_entry(bomb) is False


class TestOpenEntryStream:
    """Tests for the guarded entry stream."""

    def test_reads_safe_entry(self, make_zip):
        path = make_zip({"manifest.json": '{"xapk_version": 2}'})

        with ZipArchive.open(path) as archive:
            entry = archive.get_entry("manifest.json")
            assert entry is not None
            with open_entry_stream(archive, entry) as stream:
                assert stream.read() == b'{"xapk_version": 2}'

    def test_rejects_traversal_entry(self, make_zip):
        path = make_zip({"../evil.json": "{}"})

        with ZipArchive.open(path) as archive:
            entry = archive.get_entry("../evil.json")
            assert entry is not None
            with pytest.raises(UnsafeZipEntryError, match="evil.json"):
                open_entry_stream(archive, entry)

    def test_rejects_zip_bomb(self, make_zip, monkeypatch):
        monkeypatch.setattr(settings, "zip_bomb_min_uncompressed_size", 100)
        path = make_zip({"zeros.bin": b"\0" * 100_000})

        with ZipArchive.open(path) as archive:
            entry = archive.get_entry("zeros.bin")
            assert entry is not None
            with pytest.raises(UnsafeZipEntryError, match="zip bomb"):
                open_entry_stream(archive, entry)

    def test_stream_limited_to_declared_size(self, make_zip):
        path = make_zip({"a.txt": "hello world"})
        understated = ZipArchiveEntry(name="a.txt", size=5, compressed_size=5)

        with ZipArchive.open(path) as archive:
            with open_entry_stream(archive, understated) as stream:
                with pytest.raises(ZipEntrySizeExceededError):
                    stream.read()

    def test_empty_entry(self, make_zip):
        path = make_zip({"empty.txt": b""})

        with ZipArchive.open(path) as archive:
            entry = archive.get_entry("empty.txt")
            assert entry is not None
            with open_entry_stream(archive, entry) as stream:
                assert stream.read() == b""

    def test_checks_disabled_skip_gate(self, make_zip, checks_disabled):
        path = make_zip({"../evil.json": "{}"})

        with ZipArchive.open(path) as archive:
            entry = archive.get_entry("../evil.json")
            assert entry is not None
            with open_entry_stream(archive, entry) as stream:
                assert stream.read() == b"{}"


class TestVisitZipEntries:
    """Tests for the entry visitors."""

    def test_returns_first_non_none(self, make_zip):
        path = make_zip({"a.txt": "1", "b.txt": "2", "c.txt": "3"})
        seen = []

        def visitor(archive, entry):
            seen.append(entry.name)
            return entry.name if entry.name == "b.txt" else None

        assert visit_zip_entries(path, visitor) == "b.txt"
        assert seen == ["a.txt", "b.txt"]

    def test_returns_none_when_exhausted(self, make_zip):
        path = make_zip({"a.txt": "1"})

        assert visit_zip_entries(path, lambda archive, entry: None) is None

    def test_skips_invalid_entries(self, make_zip):
        path = make_zip({"../evil.txt": "x", "good.txt": "y"})
        seen = []

        visit_zip_entries(path, lambda archive, entry: seen.append(entry.name))

        assert seen == ["good.txt"]

    def test_entries_limit(self, make_zip, monkeypatch):
        monkeypatch.setattr(settings, "zip_max_entries_count", 2)
        path = make_zip({f"{i}.txt": str(i) for i in range(5)})

        with pytest.raises(ZipProcessingError) as exc_info:
            visit_zip_entries(path, lambda archive, entry: None)

        assert isinstance(exc_info.value.__cause__, ZipEntriesLimitError)

    def test_visitor_error_is_wrapped(self, make_zip):
        path = make_zip({"a.txt": "1"})

        def visitor(archive, entry):
            raise KeyError("boom")

        with pytest.raises(ZipProcessingError, match="Failed to process zip file"):
            visit_zip_entries(path, visitor)

    def test_not_a_zip_is_wrapped(self, tmp_path: Path):
        path = tmp_path / "plain.txt"
        path.write_text("nope")

        with pytest.raises(ZipProcessingError):
            visit_zip_entries(path, lambda archive, entry: None)

    def test_with_cond_stops_on_false(self, make_zip):
        path = make_zip({"a.txt": "1", "b.txt": "2", "c.txt": "3"})
        seen = []

        def visitor(archive, entry):
            seen.append(entry.name)
            return entry.name != "b.txt"

        visit_zip_entries_with_cond(path, visitor)

        assert seen == ["a.txt", "b.txt"]

    def test_read_zip_entries_skips_directories(self, make_zip):
        path = make_zip({"dir/": "", "dir/a.txt": "alpha", "b.txt": "beta"})
        contents = {}

        def consumer(entry, stream):
            contents[entry.name] = stream.read()

        read_zip_entries(path, consumer)

        assert contents == {"dir/a.txt": b"alpha", "b.txt": b"beta"}

    def test_read_zip_entries_wraps_consumer_error(self, make_zip):
        path = make_zip({"a.txt": "alpha"})

        def consumer(entry, stream):
            raise ValueError("bad content")

        with pytest.raises(ZipProcessingError):
            read_zip_entries(path, consumer)


def test_security_module_reads_settings_at_call_time(monkeypatch):
    monkeypatch.setattr(settings, "zip_security_disabled", True)

    assert security._checks_disabled() is True
