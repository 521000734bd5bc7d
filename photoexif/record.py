# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exif record and result assembly

Maps the raw tag values produced by the directory decoder onto the
fields shown to the user. Every field is independently optional; a tag
that is missing or cannot be converted leaves its field as None.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from photoexif.date_formatter import parse_exif_datetime
from photoexif.exif_tags import EXIF_TAGS_OF_INTEREST
from photoexif.value_formatter import FIELD_FORMATTERS


@dataclass(frozen=True)
class ExifRecord:
    """Display-oriented EXIF fields of one photo."""
    captured_at: Optional[datetime] = None
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    exposure_time: Optional[str] = None
    aperture: Optional[str] = None
    iso: Optional[str] = None
    focal_length: Optional[str] = None
    lens_model: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    @property
    def camera_label(self) -> Optional[str]:
        """Make and model joined for display, e.g. ``Canon Canon EOS R5``."""
        parts = [part for part in (self.camera_make, self.camera_model) if part]
        return " ".join(parts) if parts else None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary.

        Absent fields are left out and ``captured_at`` is rendered in
        ISO 8601 form.
        """
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, datetime):
                value = value.isoformat()
            result[f.name] = value
        return result


def assemble_record(raw_tags: Mapping[int, Any]) -> ExifRecord:
    """
    Build an ExifRecord from decoded tag values.

    Args:
        raw_tags: Mapping of tag id to raw value from the directory decoder

    Returns:
        ExifRecord with each field set only if its tag decoded cleanly
    """
    values: Dict[str, Any] = {}
    for tag, raw in raw_tags.items():
        spec = EXIF_TAGS_OF_INTEREST.get(tag)
        if spec is None or spec.field is None:
            continue

        if spec.field == 'captured_at':
            value = parse_exif_datetime(raw) if isinstance(raw, str) else None
        else:
            value = FIELD_FORMATTERS[spec.field](raw)

        if value is not None:
            values[spec.field] = value

    return ExifRecord(**values)
