# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core photoexif API

Runs the three parsing stages over a byte buffer: the JPEG scanner finds
the Exif segment, the directory decoder reads its tags, and the result
assembler turns them into an ExifRecord. The parsing functions never
raise for bad input; they return None when no metadata is available.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from photoexif.exceptions import MetadataReadError
from photoexif.format_detector import FormatDetector, JPEG_MEDIA_TYPE
from photoexif.jpeg_scanner import scan_jpeg
from photoexif.record import ExifRecord, assemble_record
from photoexif.tiff_directory import decode_tag_directory

logger = logging.getLogger(__name__)

# JPEG places its header segments, Exif included, before the scan data
PREFIX_SIZE = 64 * 1024


def extract_exif(buffer, media_type: Optional[str] = JPEG_MEDIA_TYPE) -> Optional[ExifRecord]:
    """
    Extract Exif fields from an in-memory JPEG buffer.

    Args:
        buffer: File bytes, or a prefix of them (see PREFIX_SIZE)
        media_type: Declared media type of the file; anything other than
            JPEG returns None without looking at the buffer

    Returns:
        ExifRecord (possibly with every field absent), or None when the
        file carries no readable Exif block
    """
    if not FormatDetector.is_supported_media_type(media_type):
        logger.debug("Skipping unsupported media type %r", media_type)
        return None

    payload_range = scan_jpeg(buffer)
    if payload_range is None:
        return None

    raw_tags = decode_tag_directory(buffer, payload_range)
    if raw_tags is None:
        return None

    return assemble_record(raw_tags)


def read_file_prefix(file_path: Union[str, Path], prefix_size: int = PREFIX_SIZE) -> bytes:
    """
    Read at most ``prefix_size`` bytes from the start of a file.

    Raises:
        MetadataReadError: If the file cannot be opened or read
    """
    try:
        with open(file_path, 'rb') as f:
            return f.read(prefix_size)
    except OSError as e:
        raise MetadataReadError(f"Cannot read {file_path}: {e.strerror or e}") from e


def read_exif(
    file_path: Union[str, Path],
    media_type: Optional[str] = None,
    prefix_size: int = PREFIX_SIZE,
) -> Optional[ExifRecord]:
    """
    Read Exif fields from a file on disk.

    Args:
        file_path: Path to the image file
        media_type: Declared media type; guessed from the file name, then
            from the leading bytes, when not given
        prefix_size: Number of leading bytes to read

    Returns:
        ExifRecord, or None if the file is not a JPEG or has no Exif block

    Raises:
        MetadataReadError: If the file cannot be read
    """
    path = Path(file_path)
    if media_type is None:
        media_type = FormatDetector.detect_media_type(file_path=path)
    if media_type is not None and not FormatDetector.is_supported_media_type(media_type):
        logger.debug("%s: unsupported media type %s", path, media_type)
        return None

    data = read_file_prefix(path, prefix_size)
    if media_type is None:
        media_type = FormatDetector.detect_media_type(file_data=data)

    return extract_exif(data, media_type)
