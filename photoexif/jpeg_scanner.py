# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG segment scanner

Walks the marker segments of a JPEG stream from the SOI marker and
locates the APP1 segment that carries the Exif payload. All header
segments precede the scan data, so only a prefix of the file is needed.

Copyright 2025 DNAi inc.
"""

import logging
from typing import NamedTuple, Optional

from photoexif.byte_cursor import ByteCursor

logger = logging.getLogger(__name__)

SOI = 0xFFD8
EOI = 0xFFD9
SOS = 0xFFDA
APP1 = 0xFFE1
TEM = 0xFF01

EXIF_SIGNATURE = b'Exif\x00\x00'


class PayloadRange(NamedTuple):
    """Byte range ``[start, end)`` of a segment payload inside the buffer."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def _is_standalone(marker: int) -> bool:
    # RSTn and TEM carry no length field
    return marker == TEM or 0xFFD0 <= marker <= 0xFFD7


def scan_jpeg(buffer) -> Optional[PayloadRange]:
    """
    Find the Exif APP1 payload in a JPEG byte buffer.

    Args:
        buffer: JPEG bytes (a prefix of the file is enough)

    Returns:
        PayloadRange of the APP1 payload (starting at the ``Exif\\0\\0``
        signature), or None when the buffer is not a JPEG stream, is
        truncated, or has no Exif segment before the scan data.
    """
    cursor = ByteCursor(buffer)

    if cursor.u16_be(0) != SOI:
        logger.debug("No JPEG SOI marker")
        return None

    offset = 2
    while True:
        marker = cursor.u16_be(offset)
        if marker is None:
            logger.debug("Reached end of buffer before Exif segment")
            return None
        if marker >> 8 != 0xFF:
            logger.debug("Invalid segment marker 0x%04X at offset %d", marker, offset)
            return None

        if marker in (SOS, EOI):
            logger.debug("Reached marker 0x%04X before Exif segment", marker)
            return None

        if _is_standalone(marker):
            offset += 2
            continue

        segment_start = offset + 2
        length = cursor.u16_be(segment_start)
        if length is None or length < 2:
            logger.debug("Truncated or invalid segment header at offset %d", offset)
            return None

        segment_end = segment_start + length
        if segment_end > len(cursor):
            logger.debug("Segment 0x%04X at offset %d runs past end of buffer", marker, offset)
            return None

        if marker == APP1 and cursor.startswith(segment_start + 2, EXIF_SIGNATURE):
            return PayloadRange(segment_start + 2, segment_end)

        # Other APPn, DQT, SOFn, APP1/XMP, ... are skipped
        offset = segment_end
