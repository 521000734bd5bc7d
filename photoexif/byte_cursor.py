# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Bounded byte cursor

A fixed window over an immutable byte buffer. Every read checks that the
requested bytes lie entirely inside the window before touching the buffer
and returns None when they do not, so callers never see an IndexError or
a silently truncated slice.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Optional


class ByteCursor:
    """
    Read-only, bounds-checked view of ``buffer[start:end]``.

    Offsets passed to the read methods are absolute positions in the
    underlying buffer. A cursor can be narrowed with :meth:`window` and
    switched to another byte order with :meth:`with_endian`; neither
    copies the buffer.
    """

    def __init__(self, buffer, start: int = 0, end: Optional[int] = None, endian: str = '>'):
        """
        Initialize the cursor.

        Args:
            buffer: Any object supporting len() and slicing that returns bytes
            start: First readable position
            end: One past the last readable position (defaults to len(buffer))
            endian: struct byte order prefix, '<' or '>'
        """
        length = len(buffer)
        if end is None or end > length:
            end = length
        if start < 0:
            start = 0
        self._buffer = buffer
        self.start = start
        self.end = max(start, end)
        self.endian = endian

    def __len__(self) -> int:
        return self.end - self.start

    def has(self, offset: int, size: int) -> bool:
        """Return True if ``size`` bytes starting at ``offset`` are readable."""
        return size >= 0 and self.start <= offset and offset + size <= self.end

    def window(self, start: int, end: int) -> Optional['ByteCursor']:
        """Return a narrower cursor over ``[start, end)`` or None if it does not fit."""
        if not self.has(start, end - start):
            return None
        return ByteCursor(self._buffer, start, end, self.endian)

    def with_endian(self, endian: str) -> 'ByteCursor':
        return ByteCursor(self._buffer, self.start, self.end, endian)

    def read_bytes(self, offset: int, size: int) -> Optional[bytes]:
        if not self.has(offset, size):
            return None
        return bytes(self._buffer[offset:offset + size])

    def u8(self, offset: int) -> Optional[int]:
        data = self.read_bytes(offset, 1)
        if data is None:
            return None
        return data[0]

    def u16(self, offset: int) -> Optional[int]:
        data = self.read_bytes(offset, 2)
        if data is None:
            return None
        return struct.unpack(f'{self.endian}H', data)[0]

    def u32(self, offset: int) -> Optional[int]:
        data = self.read_bytes(offset, 4)
        if data is None:
            return None
        return struct.unpack(f'{self.endian}I', data)[0]

    def u16_be(self, offset: int) -> Optional[int]:
        """Read a big-endian 16-bit value regardless of the cursor byte order."""
        data = self.read_bytes(offset, 2)
        if data is None:
            return None
        return struct.unpack('>H', data)[0]

    def startswith(self, offset: int, prefix: bytes) -> bool:
        return self.read_bytes(offset, len(prefix)) == prefix
