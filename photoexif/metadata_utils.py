# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata utility functions for common operations.

Quick presence checks and batch reading over many files. Parsing is
CPU-bound and stateless, so batches run on a bounded thread pool.

Copyright 2025 DNAi inc.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union

from photoexif.core import PREFIX_SIZE, read_exif, read_file_prefix
from photoexif.exceptions import PhotoExifError
from photoexif.jpeg_scanner import scan_jpeg
from photoexif.record import ExifRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


def has_exif(file_path: Union[str, Path], prefix_size: int = PREFIX_SIZE) -> bool:
    """
    Quickly check if a file has an Exif segment without decoding it.

    Only the JPEG segment structure is walked; the tag directory is not
    validated, so a True result can still produce an empty record.

    Args:
        file_path: Path to the file to check
        prefix_size: Number of leading bytes to inspect

    Returns:
        True if an Exif APP1 segment was found, False otherwise
    """
    try:
        data = read_file_prefix(file_path, prefix_size)
    except PhotoExifError:
        return False
    return scan_jpeg(data) is not None


def batch_read_exif(
    file_paths: Iterable[Union[str, Path]],
    max_workers: int = DEFAULT_MAX_WORKERS,
    error_handler: Optional[Callable[[Path, Exception], None]] = None,
) -> Dict[Path, Optional[ExifRecord]]:
    """
    Read Exif fields from multiple files in parallel.

    Args:
        file_paths: Files to read
        max_workers: Upper bound on files parsed at the same time
        error_handler: Optional callback for files that cannot be read
            (path, exception); such files are left out of the result

    Returns:
        Dictionary mapping each readable file path to its ExifRecord, or
        None when it has no metadata

    Example:
        >>> records = batch_read_exif(['a.jpg', 'b.jpg'])
        >>> records[Path('a.jpg')].camera_model
    """
    paths = [Path(p) for p in file_paths]
    results: Dict[Path, Optional[ExifRecord]] = {}

    def _read(path: Path):
        try:
            return path, read_exif(path), None
        except PhotoExifError as e:
            return path, None, e

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        for path, record, error in executor.map(_read, paths):
            if error is not None:
                logger.debug("Failed to read %s: %s", path, error)
                if error_handler:
                    error_handler(path, error)
                continue
            results[path] = record

    return results
