import struct
import threading
from datetime import datetime

import pytest

from photoexif.core import PREFIX_SIZE, extract_exif, read_exif
from photoexif.exceptions import MetadataReadError
from photoexif.record import ExifRecord

from exif_builders import (
    ASCII,
    RATIONAL,
    SOI,
    GuardedBuffer,
    build_jpeg,
    build_tiff,
    full_camera_tiff,
    segment,
)


def test_timestamp_scenario():
    data = build_jpeg(build_tiff([(0x9003, ASCII, '2024:03:15 10:30:00')], endian='<'))
    record = extract_exif(GuardedBuffer(data))
    assert record == ExifRecord(captured_at=datetime(2024, 3, 15, 10, 30, 0).astimezone())


def test_full_camera_record():
    record = extract_exif(build_jpeg(full_camera_tiff()))
    assert record.to_dict() == {
        'captured_at': datetime(2024, 3, 15, 10, 30, 0).astimezone().isoformat(),
        'camera_make': 'Canon',
        'camera_model': 'Canon EOS R5',
        'exposure_time': '1/60',
        'aperture': 'f/2.8',
        'iso': '100',
        'focal_length': '50 mm',
        'lens_model': 'RF50mm F1.8 STM',
    }


def test_byte_order_does_not_change_result():
    little = extract_exif(build_jpeg(full_camera_tiff('<')))
    big = extract_exif(build_jpeg(full_camera_tiff('>')))
    assert little == big
    assert not little.is_empty


def test_parsing_is_idempotent():
    data = build_jpeg(full_camera_tiff())
    assert extract_exif(data) == extract_exif(data)


def test_concurrent_parses_agree():
    data = build_jpeg(full_camera_tiff('>'))
    expected = extract_exif(data)
    results = []

    def worker():
        for _ in range(20):
            results.append(extract_exif(data))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 80
    assert all(r == expected for r in results)


def test_corrupted_timestamp_keeps_camera_fields():
    tiff = build_tiff([
        (0x010F, ASCII, 'Panasonic'),
        (0x0110, ASCII, 'DC-S5M2'),
        (0x9003, ASCII, '2024:99:15 10:30:00'),
    ])
    record = extract_exif(build_jpeg(tiff))
    assert record.camera_make == 'Panasonic'
    assert record.camera_model == 'DC-S5M2'
    assert record.captured_at is None


@pytest.mark.parametrize("size", range(0, 14))
def test_short_buffers_have_no_metadata(size):
    data = build_jpeg(full_camera_tiff())[:size]
    assert extract_exif(GuardedBuffer(data)) is None


def test_every_truncation_is_bounds_safe():
    data = build_jpeg(full_camera_tiff())
    for size in range(len(data)):
        extract_exif(GuardedBuffer(data[:size]))


def test_segment_longer_than_buffer():
    tiff = build_tiff([(0x010F, ASCII, 'Canon')])
    data = bytearray(build_jpeg(tiff))
    data[4:6] = struct.pack('>H', len(data) + 100)
    assert extract_exif(GuardedBuffer(bytes(data))) is None


def test_no_exif_segment():
    data = SOI + segment(0xFFE0, b'JFIF\x00\x01\x02') + segment(0xFFDB, b'\x00' * 65)
    assert extract_exif(data) is None


def test_structural_corruption_yields_no_record():
    tiff = bytearray(build_tiff([(0x010F, ASCII, 'Canon')]))
    tiff[0:2] = b'XX'
    assert extract_exif(build_jpeg(bytes(tiff))) is None


def test_valid_directory_without_interesting_tags_gives_empty_record():
    record = extract_exif(build_jpeg(build_tiff([(0x0112, 3, 1)])))
    assert record is not None
    assert record.is_empty


@pytest.mark.parametrize("media_type", ['image/png', 'image/heic', '', None])
def test_unsupported_media_type(media_type):
    data = build_jpeg(full_camera_tiff())
    assert extract_exif(data, media_type=media_type) is None


def test_media_type_with_parameters():
    data = build_jpeg(full_camera_tiff())
    assert extract_exif(data, media_type='IMAGE/JPEG; q=1') is not None


def test_accepts_memoryview_and_bytearray():
    data = build_jpeg(full_camera_tiff())
    assert extract_exif(memoryview(data)) == extract_exif(bytearray(data)) == extract_exif(data)


class TestReadExif:

    def test_reads_jpeg_file(self, tmp_path):
        path = tmp_path / 'photo.jpg'
        path.write_bytes(build_jpeg(full_camera_tiff()) + b'\x00' * 1000)
        record = read_exif(path)
        assert record.camera_model == 'Canon EOS R5'

    def test_only_prefix_is_needed(self, tmp_path):
        path = tmp_path / 'big.jpg'
        path.write_bytes(build_jpeg(full_camera_tiff()) + b'\x00' * (PREFIX_SIZE * 2))
        assert read_exif(path).lens_model == 'RF50mm F1.8 STM'

    def test_exif_beyond_prefix_is_not_found(self, tmp_path):
        padding = segment(0xFFE2, b'\x00' * 1000)
        data = SOI + padding * 3 + build_jpeg(full_camera_tiff())[2:]
        path = tmp_path / 'padded.jpg'
        path.write_bytes(data)
        assert read_exif(path, prefix_size=2000) is None
        assert read_exif(path) is not None

    def test_detects_jpeg_without_extension(self, tmp_path):
        path = tmp_path / 'photo'
        path.write_bytes(build_jpeg(build_tiff([(0x920A, RATIONAL, (35, 1))])))
        assert read_exif(path).focal_length == '35 mm'

    def test_unsupported_extension_is_not_read(self, tmp_path):
        path = tmp_path / 'photo.png'
        path.write_bytes(build_jpeg(full_camera_tiff()))
        assert read_exif(path) is None

    def test_declared_media_type_wins(self, tmp_path):
        path = tmp_path / 'upload.bin'
        path.write_bytes(build_jpeg(full_camera_tiff()))
        assert read_exif(path, media_type='image/jpeg') is not None

    def test_missing_file_raises_read_error(self, tmp_path):
        with pytest.raises(MetadataReadError):
            read_exif(tmp_path / 'missing.jpg')
