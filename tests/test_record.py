from datetime import datetime

import pytest

from photoexif.date_formatter import parse_exif_datetime
from photoexif.record import ExifRecord, assemble_record
from photoexif.value_formatter import (
    format_exposure_time,
    format_f_number,
    format_focal_length,
    format_iso,
)


def local(*args):
    return datetime(*args).astimezone()


class TestParseExifDatetime:

    def test_valid(self):
        parsed = parse_exif_datetime('2024:03:15 10:30:00')
        assert parsed == local(2024, 3, 15, 10, 30, 0)
        assert parsed.tzinfo is not None

    @pytest.mark.parametrize("text", [
        '2024:13:15 10:30:00',
        '2024:02:30 10:30:00',
        '2024:03:15 25:30:00',
        '0000:00:00 00:00:00',
        '2024-03-15 10:30:00',
        '2024:03:15T10:30:00',
        '2024:03:15 10:30',
        '2024:03:15 10:30:00\n',
        '2024:0a:15 10:30:00',
        '    :  :     :  :  ',
        '',
    ])
    def test_invalid(self, text):
        assert parse_exif_datetime(text) is None


class TestValueFormatters:

    @pytest.mark.parametrize("value,expected", [
        ((1, 60), '1/60'),
        ((10, 1250), '1/125'),
        ((1, 3), '1/3'),
        ((3, 10), '0.3'),
        ((2, 1), '2'),
        ((15, 10), '1.5'),
        ((1, 0), None),
        ((0, 1), None),
    ])
    def test_exposure_time(self, value, expected):
        assert format_exposure_time(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ((28, 10), 'f/2.8'),
        ((8, 1), 'f/8'),
        ((14, 10), 'f/1.4'),
        ((5, 0), None),
    ])
    def test_f_number(self, value, expected):
        assert format_f_number(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ((50, 1), '50 mm'),
        ((245, 10), '24.5 mm'),
        ((0, 0), None),
    ])
    def test_focal_length(self, value, expected):
        assert format_focal_length(value) == expected

    def test_iso(self):
        assert format_iso(100) == '100'
        assert format_iso(0) is None


class TestAssembleRecord:

    def test_all_fields(self):
        record = assemble_record({
            0x010F: 'Canon',
            0x0110: 'Canon EOS R5',
            0x829A: (1, 60),
            0x829D: (28, 10),
            0x8827: 100,
            0x9003: '2024:03:15 10:30:00',
            0x920A: (50, 1),
            0xA434: 'RF50mm F1.8 STM',
        })
        assert record == ExifRecord(
            captured_at=local(2024, 3, 15, 10, 30, 0),
            camera_make='Canon',
            camera_model='Canon EOS R5',
            exposure_time='1/60',
            aperture='f/2.8',
            iso='100',
            focal_length='50 mm',
            lens_model='RF50mm F1.8 STM',
        )

    def test_missing_tags_stay_absent(self):
        record = assemble_record({0x0110: 'iPhone 15 Pro'})
        assert record.camera_model == 'iPhone 15 Pro'
        assert record.camera_make is None
        assert record.captured_at is None
        assert record.to_dict() == {'camera_model': 'iPhone 15 Pro'}

    def test_bad_timestamp_does_not_affect_other_fields(self):
        record = assemble_record({0x9003: '2024:13:15 10:30:00', 0x010F: 'Sony'})
        assert record.captured_at is None
        assert record.camera_make == 'Sony'

    def test_unknown_and_structural_tags_ignored(self):
        assert assemble_record({0x0112: 1, 0x8769: 120}).is_empty

    def test_zero_denominator_drops_field(self):
        record = assemble_record({0x829D: (28, 0), 0x920A: (35, 1)})
        assert record.aperture is None
        assert record.focal_length == '35 mm'


class TestExifRecord:

    def test_empty(self):
        assert ExifRecord().is_empty
        assert ExifRecord().to_dict() == {}
        assert ExifRecord().camera_label is None

    def test_camera_label(self):
        assert ExifRecord(camera_make='Nikon', camera_model='Z 8').camera_label == 'Nikon Z 8'
        assert ExifRecord(camera_model='Z 8').camera_label == 'Z 8'

    def test_to_dict_renders_timestamp(self):
        captured = local(2024, 3, 15, 10, 30, 0)
        assert ExifRecord(captured_at=captured).to_dict() == {'captured_at': captured.isoformat()}
