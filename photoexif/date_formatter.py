# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Date parsing utilities

EXIF stores capture times as ``YYYY:MM:DD HH:MM:SS`` with no time zone.
The camera clock is taken to be in the local time zone of the machine
doing the parsing.

Copyright 2025 DNAi inc.
"""

from datetime import datetime
from typing import Optional
import re

EXIF_DATE_PATTERN = re.compile(r'(\d{4}):(\d{2}):(\d{2}) (\d{2}):(\d{2}):(\d{2})', re.ASCII)


def parse_exif_datetime(date_str: str) -> Optional[datetime]:
    """
    Parse an EXIF date-time string into a local, time-zone aware datetime.

    Args:
        date_str: String such as ``2024:03:15 10:30:00``

    Returns:
        Aware datetime in the local time zone, or None if the string does
        not have the exact shape or names an impossible date or time
    """
    match = EXIF_DATE_PATTERN.fullmatch(date_str)
    if not match:
        return None

    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second).astimezone()
    except (ValueError, OverflowError, OSError):
        return None
