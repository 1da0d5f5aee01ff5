"""File digest utilities for input summaries."""

import hashlib
from pathlib import Path

DIGEST_ALGORITHMS = ("md5", "sha1", "sha256")


def calculate_file_digests(
    file_path: Path | str, chunk_size: int = 8192
) -> dict[str, str]:
    """
    Calculate MD5, SHA-1 and SHA-256 digests of a file in one pass.

    Args:
        file_path: Path to the file to hash
        chunk_size: Size of chunks to read (default: 8KB)

    Returns:
        Mapping of algorithm name to lowercase hex digest

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the path is not a regular file
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if not file_path.is_file():
        raise ValueError(f"Not a file: {file_path}")

    hashers = {name: hashlib.new(name) for name in DIGEST_ALGORITHMS}

    with open(file_path, "rb") as f:
        while chunk := f.read(chunk_size):
            for hasher in hashers.values():
                hasher.update(chunk)

    return {name: hasher.hexdigest() for name, hasher in hashers.items()}
