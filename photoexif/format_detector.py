# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Media type detection

Decides whether a file is worth handing to the Exif parser. Only JPEG
is supported; every other media type is reported as unsupported and is
treated by the caller exactly like a file without metadata.

Copyright 2025 DNAi inc.
"""

import mimetypes
from typing import Dict, Optional, Union
from pathlib import Path


JPEG_MEDIA_TYPE = 'image/jpeg'

SUPPORTED_MEDIA_TYPES = frozenset({
    'image/jpeg',
    'image/jpg',
    'image/pjpeg',
})


class FormatDetector:
    """
    Detects media types from file signatures and extensions.
    """

    # Format signatures (magic numbers)
    FORMAT_SIGNATURES: Dict[bytes, str] = {
        b'\xff\xd8\xff': 'image/jpeg',
        b'II*\x00': 'image/tiff',
        b'MM\x00*': 'image/tiff',
        b'\x89PNG\r\n\x1a\n': 'image/png',
        b'GIF87a': 'image/gif',
        b'GIF89a': 'image/gif',
        b'BM': 'image/bmp',
    }

    # Extension to media type mapping, for types mimetypes may not know
    EXTENSION_FORMATS: Dict[str, str] = {
        '.jpg': 'image/jpeg', '.jpeg': 'image/jpeg', '.jpe': 'image/jpeg',
        '.jfif': 'image/jpeg',
        '.heic': 'image/heic', '.heif': 'image/heif',
        '.webp': 'image/webp',
    }

    @classmethod
    def detect_media_type(cls, file_path: Optional[Union[str, Path]] = None,
                          file_data: Optional[bytes] = None) -> Optional[str]:
        """
        Detect the media type of a file from its name and/or leading bytes.

        Args:
            file_path: Path to file
            file_data: File data (first few bytes)

        Returns:
            Media type such as ``image/jpeg``, or None if not detected
        """
        if file_path:
            ext = Path(file_path).suffix.lower()
            if ext in cls.EXTENSION_FORMATS:
                return cls.EXTENSION_FORMATS[ext]
            guessed, _ = mimetypes.guess_type(str(file_path))
            if guessed:
                return guessed

        if file_data:
            for signature, media_type in cls.FORMAT_SIGNATURES.items():
                if file_data.startswith(signature):
                    return media_type

        return None

    @staticmethod
    def is_supported_media_type(media_type: Optional[str]) -> bool:
        """
        Check if a media type can carry metadata this package reads.

        Args:
            media_type: Declared media type, parameters allowed
                (``image/jpeg; charset=binary``)

        Returns:
            True for JPEG
        """
        if not media_type:
            return False
        return media_type.split(';', 1)[0].strip().lower() in SUPPORTED_MEDIA_TYPES
