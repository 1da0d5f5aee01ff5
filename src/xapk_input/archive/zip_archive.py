"""
Read-only zip archive access.

Wraps :mod:`zipfile` behind a small archive/entry interface so callers never
touch ``ZipInfo`` directly. Entry content is meant to be read through
:func:`xapk_input.archive.security.open_entry_stream`, which applies the
security checks before handing out a stream.
"""

import logging
import zipfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import IO, Iterator, Optional

logger = logging.getLogger(__name__)


def is_zip_file(path: Path | str) -> bool:
    """
    Check whether a file is a readable zip container.

    Never raises: missing, unreadable or non-regular files report False.
    """
    path = Path(path)
    try:
        if not path.is_file():
            return False
        return zipfile.is_zipfile(path)
    except OSError as e:
        logger.debug(f"Zip check failed for {path}: {e}")
        return False


@dataclass(frozen=True)
class ZipArchiveEntry:
    """
    Descriptor of a single archive entry.

    Attributes:
        name: Entry name exactly as stored in the archive
        size: Declared uncompressed size in bytes
        compressed_size: Declared compressed size in bytes
        is_directory: Whether the entry is a directory marker
        last_modified: Modification time recorded in the archive
    """

    name: str
    size: int
    compressed_size: int
    is_directory: bool = False
    last_modified: Optional[datetime] = None

    @classmethod
    def from_zip_info(cls, info: zipfile.ZipInfo) -> "ZipArchiveEntry":
        try:
            last_modified: Optional[datetime] = datetime(*info.date_time)
        except ValueError:
            last_modified = None
        return cls(
            name=info.filename,
            size=info.file_size,
            compressed_size=info.compress_size,
            is_directory=info.is_dir(),
            last_modified=last_modified,
        )


class ZipArchive:
    """
    Zip archive opened for reading.

    Use as a context manager so the underlying file handle is released on
    every exit path:

        >>> with ZipArchive.open(Path("app.xapk")) as archive:
        ...     entry = archive.get_entry("manifest.json")
    """

    def __init__(self, path: Path, zip_file: zipfile.ZipFile) -> None:
        self.path = path
        self._zip = zip_file
        self._closed = False

    @classmethod
    def open(cls, path: Path | str) -> "ZipArchive":
        """
        Open a zip archive.

        Raises:
            FileNotFoundError: If the file does not exist
            zipfile.BadZipFile: If the file is not a valid zip container
        """
        path = Path(path)
        return cls(path, zipfile.ZipFile(path, "r"))

    def __enter__(self) -> "ZipArchive":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        if not self._closed:
            self._zip.close()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def entries(self) -> Iterator[ZipArchiveEntry]:
        """Iterate entries in archive order."""
        for info in self._zip.infolist():
            yield ZipArchiveEntry.from_zip_info(info)

    def get_entry(self, name: str) -> Optional[ZipArchiveEntry]:
        """Look up an entry by its exact (case-sensitive) name."""
        try:
            info = self._zip.getinfo(name)
        except KeyError:
            return None
        return ZipArchiveEntry.from_zip_info(info)

    def open_entry(self, entry: ZipArchiveEntry) -> IO[bytes]:
        """
        Open the raw byte stream of an entry.

        No security checks are applied here; go through
        ``security.open_entry_stream`` instead.
        """
        return self._zip.open(entry.name, "r")

    def __len__(self) -> int:
        return len(self._zip.infolist())

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<ZipArchive {self.path} ({state})>"
