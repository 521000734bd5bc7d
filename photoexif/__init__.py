# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
photoexif - A Pure Python Exif Reader for Photo Browsers

Reads the capture time, camera and exposure fields that a photo browser
displays, straight from the bytes of a JPEG file. No image decoding
library is involved: the JPEG segment structure and the embedded TIFF
tag directory are parsed directly.

Damaged, truncated or unsupported files never raise; they simply yield
no metadata.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.3"
__author__ = "DNAi inc."

from photoexif.core import PREFIX_SIZE, extract_exif, read_exif
from photoexif.exceptions import PhotoExifError, MetadataReadError, UnsupportedFormatError
from photoexif.jpeg_scanner import PayloadRange, scan_jpeg
from photoexif.metadata_utils import batch_read_exif, has_exif
from photoexif.record import ExifRecord, assemble_record
from photoexif.tiff_directory import (
    DecodedDirectory,
    FieldFailure,
    StructuralFailure,
    TagDirectoryDecoder,
    decode_tag_directory,
)

__all__ = [
    "PREFIX_SIZE",
    "extract_exif",
    "read_exif",
    "PhotoExifError",
    "MetadataReadError",
    "UnsupportedFormatError",
    "PayloadRange",
    "scan_jpeg",
    "batch_read_exif",
    "has_exif",
    "ExifRecord",
    "assemble_record",
    "DecodedDirectory",
    "FieldFailure",
    "StructuralFailure",
    "TagDirectoryDecoder",
    "decode_tag_directory",
]
