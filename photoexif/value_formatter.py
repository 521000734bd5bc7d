# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Value formatting for display

Turns raw decoded EXIF values (integers, rationals, strings) into the
short text shown next to a photo, e.g. ``1/60``, ``f/2.8``, ``50 mm``.

Copyright 2025 DNAi inc.
"""

from typing import Any, Optional, Tuple


def _ratio(value: Any) -> Optional[float]:
    if not isinstance(value, tuple) or len(value) != 2:
        return None
    num, den = value
    if den == 0:
        return None
    return num / den


def _plain_number(result: float) -> str:
    if result == int(result):
        return str(int(result))
    return f"{result:g}"


def format_exposure_time(value: Tuple[int, int]) -> Optional[str]:
    """
    Format ExposureTime in seconds.

    Sub-second exposures are shown as ``1/X`` when they are close to a
    unit fraction, otherwise as a decimal.
    """
    result = _ratio(value)
    if result is None or result <= 0:
        return None
    if result < 1:
        closest_den = round(1.0 / result)
        if abs(result - 1.0 / closest_den) < 0.001:
            return f"1/{closest_den}"
    return _plain_number(result)


def format_f_number(value: Tuple[int, int]) -> Optional[str]:
    """Format FNumber as ``f/2.8``."""
    result = _ratio(value)
    if result is None or result <= 0:
        return None
    return f"f/{_plain_number(round(result, 1))}"


def format_focal_length(value: Tuple[int, int]) -> Optional[str]:
    """Format FocalLength in millimetres."""
    result = _ratio(value)
    if result is None or result <= 0:
        return None
    return f"{_plain_number(round(result, 1))} mm"


def format_iso(value: Any) -> Optional[str]:
    if not isinstance(value, int) or value <= 0:
        return None
    return str(value)


def format_text(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value:
        return None
    return value


FIELD_FORMATTERS = {
    'camera_make': format_text,
    'camera_model': format_text,
    'lens_model': format_text,
    'exposure_time': format_exposure_time,
    'aperture': format_f_number,
    'iso': format_iso,
    'focal_length': format_focal_length,
}
