# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for photoexif

The parser itself never raises: damaged or unsupported input yields
"no metadata". These exceptions belong to the file-facing layer that
reads a prefix of a file from disk before handing it to the parser.

Copyright 2025 DNAi inc.
"""


class PhotoExifError(Exception):
    """
    Base exception for all photoexif errors.

    Allows catch-all handling of any error raised by the file-facing
    helpers and the command-line interface.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(PhotoExifError):
    """
    Raised when the bytes of a file cannot be read.

    This exception is raised when:
    - The file does not exist or is not a regular file
    - File permissions prevent reading
    - The operating system reports an I/O error

    It is never raised for malformed metadata.
    """
    pass


class UnsupportedFormatError(PhotoExifError):
    """
    Raised when a file is not in the one supported container format.

    Only used where the caller explicitly asks to be told, such as the
    command-line interface in strict mode.
    """
    pass
