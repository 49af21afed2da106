"""Hash calculation utilities"""

import hashlib
from pathlib import Path
from typing import Iterable, List, Optional

import aiofiles

from ..api.exceptions import BundleError
from ..constants import DEFAULT_CHUNK_SIZE, VERSION_HASH_ALGORITHM, VERSION_LENGTH


def sort_for_hashing(files: Iterable[Path], root: Optional[Path] = None) -> List[Path]:
    """
    Order files lexicographically by path

    Args:
        files: File paths
        root: Bundle root; when given, files are ordered by their path relative to it

    Returns:
        Sorted list of paths
    """
    def _key(file_path: Path) -> str:
        file_path = Path(file_path)
        if root is not None:
            return file_path.relative_to(root).as_posix()
        return file_path.as_posix()

    return sorted((Path(f) for f in files), key=_key)


async def compute_version(files: Iterable[Path],
                          root: Optional[Path] = None,
                          algorithm: str = VERSION_HASH_ALGORITHM,
                          length: int = VERSION_LENGTH,
                          chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Calculate the content version of a template bundle

    Every file is read in sorted path order and fed into a single digest,
    so the result does not depend on directory traversal order.

    Args:
        files: Bundle file paths
        root: Bundle root used for ordering
        algorithm: Hash algorithm
        length: Number of hex characters to keep
        chunk_size: Read chunk size

    Returns:
        Short hex version string

    Raises:
        BundleError: If any file cannot be read
    """
    hash_func = hashlib.new(algorithm)

    for file_path in sort_for_hashing(files, root):
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                while True:
                    chunk = await f.read(chunk_size)
                    if not chunk:
                        break
                    hash_func.update(chunk)
        except OSError as e:
            raise BundleError(f"Unable to read {file_path}: {e}") from e

    return hash_func.hexdigest()[:length]
