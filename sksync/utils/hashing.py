# SKSYNC Hashing Utilities
# Content fingerprints for change detection

import hashlib
from pathlib import Path

HASH_ALGORITHM = "sha256"


def content_hash(content: str | bytes) -> str:
    """
    Calculate the fingerprint of file content.

    The digest is a lowercase SHA-256 hex string. It depends only on the
    bytes of the content: strings are UTF-8 encoded first, no salt or
    timestamp is mixed in, and every input (including empty) has a hash.

    Args:
        content: String or bytes content.

    Returns:
        Hex digest of hash.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(content)
    return hasher.hexdigest()


def file_hash(path: Path, *, chunk_size: int = 8192) -> str | None:
    """
    Calculate the fingerprint of a file on disk.

    Args:
        path: Path to file.
        chunk_size: Chunk size for reading large files.

    Returns:
        Hex digest of hash, or None if path is not a regular file.
    """
    if not path.exists() or not path.is_file():
        return None

    hasher = hashlib.new(HASH_ALGORITHM)

    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)

    return hasher.hexdigest()
