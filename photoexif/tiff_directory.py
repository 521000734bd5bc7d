# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF tag directory decoder

This module decodes the TIFF structure embedded in an Exif APP1 payload:
the ``Exif\\0\\0`` signature, the byte order marker, the magic number, and
the image file directories (IFDs) that follow. Only the tags listed in
EXIF_TAGS_OF_INTEREST are decoded.

Two kinds of failure are kept apart. A StructuralFailure (bad header,
bad directory offset, entry window past the end of the payload) means
the directory cannot be trusted and the whole decode yields nothing.
A FieldFailure (wrong type or count, value out of bounds, bad text)
only drops the one tag it belongs to.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Union

from photoexif.byte_cursor import ByteCursor
from photoexif.exif_tags import (
    DATETIME_ORIGINAL,
    EXIF_IFD_POINTER,
    EXIF_TAGS_OF_INTEREST,
    ExifTagType,
    TagSpec,
    byte_length,
)
from photoexif.jpeg_scanner import EXIF_SIGNATURE, PayloadRange

logger = logging.getLogger(__name__)

TIFF_MAGIC = 42
ENTRY_SIZE = 12
# The first IFD cannot start inside the 8-byte TIFF header
MIN_IFD_OFFSET = 8

BYTE_ORDERS = {
    b'II': '<',
    b'MM': '>',
}


@dataclass(frozen=True)
class StructuralFailure:
    """The directory skeleton is unusable; nothing from this payload is trusted."""
    reason: str


@dataclass(frozen=True)
class FieldFailure:
    """One tag could not be decoded; sibling tags are unaffected."""
    tag: int
    reason: str


@dataclass
class DecodedDirectory:
    """Tags decoded from one Exif payload."""
    tags: Dict[int, Any]
    endian: str
    failures: List[FieldFailure] = field(default_factory=list)


class DirectoryEntry(NamedTuple):
    """
    One 12-byte IFD entry.

    ``value_pos`` is the absolute buffer position of the 4-byte
    value-or-offset field.
    """
    tag: int
    tag_type: int
    count: int
    value_pos: int


class TagDirectoryDecoder:
    """
    Decoder for the IFDs of a single Exif payload.

    The decoder reads IFD0 and, when IFD0 carries an Exif sub-IFD
    pointer, the Exif sub-IFD. Offsets stored in the payload are
    relative to the base offset: the first byte after the signature,
    where the TIFF header starts.
    """

    def __init__(self, buffer, start: int = 0, end: Optional[int] = None):
        """
        Initialize the decoder.

        Args:
            buffer: Bytes containing the payload
            start: Position of the ``Exif\\0\\0`` signature in buffer
            end: End of the payload (defaults to the end of buffer)
        """
        self.cursor = ByteCursor(buffer, start, end)
        self.base = self.cursor.start + len(EXIF_SIGNATURE)

    def decode(self) -> Union[DecodedDirectory, StructuralFailure]:
        """
        Decode the tags of interest.

        Returns:
            DecodedDirectory, or StructuralFailure if the header or IFD0
            skeleton is damaged
        """
        cursor = self.cursor
        base = self.base

        if not cursor.startswith(cursor.start, EXIF_SIGNATURE):
            return StructuralFailure("missing Exif signature")

        endian = BYTE_ORDERS.get(cursor.read_bytes(base, 2))
        if endian is None:
            return StructuralFailure("invalid byte order marker")
        cursor = cursor.with_endian(endian)
        self.cursor = cursor

        magic = cursor.u16(base + 2)
        if magic is None:
            return StructuralFailure("truncated TIFF header")
        if magic != TIFF_MAGIC:
            return StructuralFailure(f"invalid TIFF magic number 0x{magic:04X}")

        ifd0_offset = cursor.u32(base + 4)
        if ifd0_offset is None:
            return StructuralFailure("truncated TIFF header")

        entries = self._read_entries(ifd0_offset)
        if isinstance(entries, StructuralFailure):
            return entries

        decoded = DecodedDirectory(tags={}, endian=endian)
        self._collect(entries, decoded)

        exif_ifd_offset = decoded.tags.pop(EXIF_IFD_POINTER, None)
        if exif_ifd_offset is not None:
            sub_entries = self._read_entries(exif_ifd_offset)
            if isinstance(sub_entries, StructuralFailure):
                decoded.failures.append(FieldFailure(EXIF_IFD_POINTER, sub_entries.reason))
            else:
                self._collect(sub_entries, decoded, follow_pointers=False)

        for failure in decoded.failures:
            logger.debug("Dropped tag 0x%04X: %s", failure.tag, failure.reason)

        return decoded

    def _read_entries(self, ifd_offset: int) -> Union[List[DirectoryEntry], StructuralFailure]:
        """Bounds-check an IFD and read all of its entry windows."""
        if ifd_offset < MIN_IFD_OFFSET:
            return StructuralFailure(f"IFD offset {ifd_offset} inside TIFF header")

        cursor = self.cursor
        ifd_pos = self.base + ifd_offset
        num_entries = cursor.u16(ifd_pos)
        if num_entries is None:
            return StructuralFailure(f"IFD at offset {ifd_offset} outside payload")

        entries = []
        entry_pos = ifd_pos + 2
        for _ in range(num_entries):
            if not cursor.has(entry_pos, ENTRY_SIZE):
                return StructuralFailure(f"IFD entry at position {entry_pos} truncated")
            entries.append(DirectoryEntry(
                tag=cursor.u16(entry_pos),
                tag_type=cursor.u16(entry_pos + 2),
                count=cursor.u32(entry_pos + 4),
                value_pos=entry_pos + 8,
            ))
            entry_pos += ENTRY_SIZE
        return entries

    def _collect(self, entries: List[DirectoryEntry], decoded: DecodedDirectory,
                 follow_pointers: bool = True) -> None:
        for entry in entries:
            spec = EXIF_TAGS_OF_INTEREST.get(entry.tag)
            if spec is None or entry.tag in decoded.tags:
                continue
            if entry.tag == EXIF_IFD_POINTER and not follow_pointers:
                continue

            value = self._decode_value(entry, spec)
            if isinstance(value, FieldFailure):
                decoded.failures.append(value)
            else:
                decoded.tags[entry.tag] = value

    def _decode_value(self, entry: DirectoryEntry, spec: TagSpec) -> Union[Any, FieldFailure]:
        """Decode the value of one entry, inline or via its offset."""
        if entry.tag_type not in spec.types:
            return FieldFailure(entry.tag, f"unexpected type {entry.tag_type}")
        if entry.count == 0:
            return FieldFailure(entry.tag, "empty value")
        if spec.count is not None and entry.count != spec.count:
            return FieldFailure(entry.tag, f"unexpected count {entry.count}")

        size = byte_length(entry.tag_type, entry.count)
        if size is None:
            return FieldFailure(entry.tag, f"unknown type {entry.tag_type}")

        cursor = self.cursor
        if size <= 4:
            value_pos = entry.value_pos
        else:
            value_pos = self.base + cursor.u32(entry.value_pos)

        data = cursor.read_bytes(value_pos, size)
        if data is None:
            return FieldFailure(entry.tag, "value outside payload")

        tag_type = entry.tag_type
        if tag_type == ExifTagType.ASCII:
            return self._decode_ascii(entry.tag, data)
        if tag_type == ExifTagType.SHORT:
            return struct.unpack(f'{cursor.endian}H', data[:2])[0]
        if tag_type == ExifTagType.LONG:
            return struct.unpack(f'{cursor.endian}I', data[:4])[0]
        if tag_type == ExifTagType.RATIONAL:
            return struct.unpack(f'{cursor.endian}II', data[:8])
        return FieldFailure(entry.tag, f"type {tag_type} not decoded")

    @staticmethod
    def _decode_ascii(tag: int, data: bytes) -> Union[str, FieldFailure]:
        raw = data.split(b'\x00', 1)[0]
        if tag == DATETIME_ORIGINAL:
            try:
                text = raw.decode('ascii')
            except UnicodeDecodeError:
                return FieldFailure(tag, "non-ASCII timestamp")
        else:
            text = raw.decode('utf-8', errors='replace').strip()
        if not text:
            return FieldFailure(tag, "empty string")
        return text


def decode_tag_directory(buffer, payload_range: Optional[PayloadRange] = None) -> Optional[Dict[int, Any]]:
    """
    Decode the tags of interest from an Exif payload.

    Args:
        buffer: The Exif payload, or a larger buffer containing it
        payload_range: Where the payload sits in buffer (defaults to all of it)

    Returns:
        Mapping of tag id to raw decoded value, or None on structural failure
    """
    if payload_range is None:
        payload_range = PayloadRange(0, len(buffer))

    result = TagDirectoryDecoder(buffer, payload_range.start, payload_range.end).decode()
    if isinstance(result, StructuralFailure):
        logger.debug("Exif directory rejected: %s", result.reason)
        return None
    return result.tags
