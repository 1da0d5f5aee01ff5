"""
Security checks for reading zip entries.

Every entry stream handed out by this package goes through
:func:`open_entry_stream`, which rejects path traversal, absolute entry
names and probable zip bombs, and caps the number of bytes read at the
entry's declared size.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Optional, TypeVar

from xapk_input.archive.zip_archive import ZipArchive, ZipArchiveEntry
from xapk_input.config import settings
from xapk_input.exceptions import (
    UnsafeZipEntryError,
    ZipEntriesLimitError,
    ZipEntrySizeExceededError,
    ZipProcessingError,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _checks_disabled() -> bool:
    return settings.zip_security_disabled


def _is_in_subdirectory_internal(base_dir: Path, path: Path) -> bool:
    return path == base_dir or base_dir in path.parents


def is_in_subdirectory(base_dir: Path, path: Path) -> bool:
    """
    Check that ``path`` resolves to ``base_dir`` or somewhere below it.

    Both paths are canonicalized first, so symlinks and ``..`` segments
    are taken into account.
    """
    if _checks_disabled():
        return True
    try:
        return _is_in_subdirectory_internal(base_dir.resolve(), path.resolve())
    except (OSError, RuntimeError):
        return False


def is_valid_entry_name(entry_name: str) -> bool:
    """
    Check that an entry name contains no traversal, so extraction stays
    inside the target directory (prevents names like ``../classes.dex``).
    """
    if _checks_disabled():
        return True
    if ".." in entry_name:  # quick pre-check
        if "../" in entry_name or "..\\" in entry_name:
            logger.error(f"Path traversal attack detected in entry: '{entry_name}'")
            return False
    try:
        current = Path.cwd().resolve()
        if not Path(entry_name).is_absolute():
            canonical = (current / entry_name).resolve()
            if _is_in_subdirectory_internal(current, canonical):
                return True
    except (OSError, RuntimeError, ValueError):
        pass
    logger.error(
        f"Invalid file name or path traversal attack detected: '{entry_name}'"
    )
    return False


def is_zip_bomb(entry: ZipArchiveEntry) -> bool:
    """
    Detect entries whose sizes are invalid or whose compression ratio is
    implausibly high for their uncompressed size.
    """
    if _checks_disabled():
        return False
    compressed_size = entry.compressed_size
    uncompressed_size = entry.size
    invalid_size = compressed_size < 0 or uncompressed_size < 0
    possible_zip_bomb = (
        uncompressed_size >= settings.zip_bomb_min_uncompressed_size
        and compressed_size * settings.zip_bomb_detection_factor < uncompressed_size
    )
    if invalid_size or possible_zip_bomb:
        logger.error(
            f"Potential zip bomb attack detected, invalid sizes: "
            f"compressed {compressed_size}, uncompressed {uncompressed_size}, "
            f"name {entry.name}"
        )
        return True
    return False


def is_valid_entry(entry: ZipArchiveEntry) -> bool:
    return is_valid_entry_name(entry.name) and not is_zip_bomb(entry)


class LimitedReader(io.RawIOBase):
    """Raw stream that fails once more than ``limit`` bytes are produced."""

    def __init__(self, raw: BinaryIO, limit: int, name: str = "") -> None:
        self._raw = raw
        self._limit = limit
        self._name = name
        self._count = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        # Read one byte past the limit so an oversized entry is noticed
        allowed = max(self._limit - self._count + 1, 0)
        data = self._raw.read(min(len(buffer), allowed))
        self._count += len(data)
        if self._count > self._limit:
            raise ZipEntrySizeExceededError(self._name, self._limit)
        buffer[: len(data)] = data
        return len(data)

    def close(self) -> None:
        if not self.closed:
            self._raw.close()
        super().close()


def open_entry_stream(archive: ZipArchive, entry: ZipArchiveEntry) -> BinaryIO:
    """
    Open an entry for reading after passing the security checks.

    Args:
        archive: Open archive containing the entry
        entry: Entry to read

    Returns:
        Buffered binary stream; the caller is responsible for closing it

    Raises:
        UnsafeZipEntryError: If the entry name or sizes are rejected
        ZipEntrySizeExceededError: While reading, if the entry produces more
            bytes than it declares
    """
    if _checks_disabled():
        return archive.open_entry(entry)  # type: ignore[return-value]

    if not is_valid_entry_name(entry.name):
        raise UnsafeZipEntryError(entry.name, "path traversal or absolute path")
    if is_zip_bomb(entry):
        raise UnsafeZipEntryError(entry.name, "possible zip bomb")

    raw = archive.open_entry(entry)
    return io.BufferedReader(LimitedReader(raw, entry.size, entry.name))  # type: ignore[return-value]


def _walk_valid_entries(
    file_path: Path,
    visitor: Callable[[ZipArchive, ZipArchiveEntry], Optional[R]],
    stop: Callable[[Optional[R]], bool],
) -> Optional[R]:
    max_entries = settings.zip_max_entries_count
    try:
        with ZipArchive.open(file_path) as archive:
            processed = 0
            for entry in archive.entries():
                if not is_valid_entry(entry):
                    continue
                result = visitor(archive, entry)
                if stop(result):
                    return result
                processed += 1
                if not _checks_disabled() and processed > max_entries:
                    raise ZipEntriesLimitError(max_entries, entry.name)
    except Exception as e:
        raise ZipProcessingError(
            f"Failed to process zip file: {file_path.absolute()}"
        ) from e
    return None


def visit_zip_entries(
    file_path: Path | str,
    visitor: Callable[[ZipArchive, ZipArchiveEntry], Optional[R]],
) -> Optional[R]:
    """
    Visit the valid entries of a zip file.

    Iteration stops at the first non-None value returned by the visitor,
    which is then returned.

    Raises:
        ZipProcessingError: If the archive cannot be read, the visitor
            fails, or the entry count limit is exceeded
    """
    return _walk_valid_entries(
        Path(file_path), visitor, lambda result: result is not None
    )


def visit_zip_entries_with_cond(
    file_path: Path | str,
    visitor: Callable[[ZipArchive, ZipArchiveEntry], bool],
) -> None:
    """Visit valid entries until the visitor returns False."""
    _walk_valid_entries(Path(file_path), visitor, lambda keep_going: not keep_going)


def read_zip_entries(
    file_path: Path | str,
    consumer: Callable[[ZipArchiveEntry, BinaryIO], None],
) -> None:
    """Feed every valid file entry's stream to ``consumer``."""

    def visit(archive: ZipArchive, entry: ZipArchiveEntry) -> None:
        if entry.is_directory:
            return None
        try:
            with open_entry_stream(archive, entry) as stream:
                consumer(entry, stream)
        except Exception as e:
            raise ZipProcessingError(
                f"Failed to process zip entry: {entry.name}"
            ) from e
        return None

    visit_zip_entries(file_path, visit)
