# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF tag definitions

Field types and the table of tags that photoexif decodes. Adding a field
to the output is a matter of adding a row to EXIF_TAGS_OF_INTEREST and a
matching attribute on ExifRecord.

Copyright 2025 DNAi inc.
"""

from enum import IntEnum
from typing import Dict, NamedTuple, Optional, Tuple


class ExifTagType(IntEnum):
    """EXIF tag data types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    UNDEFINED = 7
    SLONG = 9
    SRATIONAL = 10


# EXIF tag sizes in bytes
TAG_SIZES = {
    ExifTagType.BYTE: 1,
    ExifTagType.ASCII: 1,
    ExifTagType.SHORT: 2,
    ExifTagType.LONG: 4,
    ExifTagType.RATIONAL: 8,
    ExifTagType.UNDEFINED: 1,
    ExifTagType.SLONG: 4,
    ExifTagType.SRATIONAL: 8,
}

# Pointer from IFD0 to the Exif sub-IFD
EXIF_IFD_POINTER = 0x8769

DATETIME_ORIGINAL = 0x9003
DATETIME_LENGTH = 20  # "YYYY:MM:DD HH:MM:SS" + NUL


class TagSpec(NamedTuple):
    """
    How to decode one tag of interest.

    Attributes:
        name: EXIF tag name
        types: Accepted field types
        count: Exact value count, or None when variable
        field: ExifRecord attribute the value feeds, or None for
            structural tags such as sub-IFD pointers
    """
    name: str
    types: Tuple[ExifTagType, ...]
    count: Optional[int]
    field: Optional[str]


EXIF_TAGS_OF_INTEREST: Dict[int, TagSpec] = {
    # IFD0
    0x010F: TagSpec("Make", (ExifTagType.ASCII,), None, "camera_make"),
    0x0110: TagSpec("Model", (ExifTagType.ASCII,), None, "camera_model"),
    EXIF_IFD_POINTER: TagSpec("ExifOffset", (ExifTagType.LONG,), 1, None),
    # Exif sub-IFD
    0x829A: TagSpec("ExposureTime", (ExifTagType.RATIONAL,), 1, "exposure_time"),
    0x829D: TagSpec("FNumber", (ExifTagType.RATIONAL,), 1, "aperture"),
    0x8827: TagSpec("ISOSpeedRatings", (ExifTagType.SHORT, ExifTagType.LONG), None, "iso"),
    DATETIME_ORIGINAL: TagSpec("DateTimeOriginal", (ExifTagType.ASCII,), DATETIME_LENGTH, "captured_at"),
    0x920A: TagSpec("FocalLength", (ExifTagType.RATIONAL,), 1, "focal_length"),
    0xA434: TagSpec("LensModel", (ExifTagType.ASCII,), None, "lens_model"),
}


def byte_length(tag_type: int, count: int) -> Optional[int]:
    """
    Encoded size of ``count`` values of ``tag_type``.

    Returns:
        Size in bytes, or None for an unknown type
    """
    try:
        size = TAG_SIZES[ExifTagType(tag_type)]
    except ValueError:
        return None
    return size * count
