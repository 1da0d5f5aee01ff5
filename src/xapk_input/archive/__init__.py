"""
Zip archive access with entry security checks.
"""

from xapk_input.archive.security import (
    is_valid_entry,
    is_valid_entry_name,
    is_zip_bomb,
    open_entry_stream,
    read_zip_entries,
    visit_zip_entries,
    visit_zip_entries_with_cond,
)
from xapk_input.archive.zip_archive import ZipArchive, ZipArchiveEntry, is_zip_file

__all__ = [
    "ZipArchive",
    "ZipArchiveEntry",
    "is_zip_file",
    "is_valid_entry",
    "is_valid_entry_name",
    "is_zip_bomb",
    "open_entry_stream",
    "read_zip_entries",
    "visit_zip_entries",
    "visit_zip_entries_with_cond",
]
