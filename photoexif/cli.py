# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for photoexif

Prints the capture time, camera and exposure fields of JPEG files as
text, JSON or CSV.

Copyright 2025 DNAi inc.
"""

import argparse
import csv
import io
import json
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Dict, List, Optional

from photoexif import __version__
from photoexif.exceptions import PhotoExifError, UnsupportedFormatError
from photoexif.format_detector import FormatDetector
from photoexif.metadata_utils import DEFAULT_MAX_WORKERS, batch_read_exif
from photoexif.record import ExifRecord

logger = logging.getLogger(__name__)

# Display labels, in output order
FIELD_LABELS = {
    'captured_at': 'Date Taken',
    'camera_make': 'Camera Make',
    'camera_model': 'Camera Model',
    'lens_model': 'Lens',
    'focal_length': 'Focal Length',
    'aperture': 'Aperture',
    'exposure_time': 'Exposure Time',
    'iso': 'ISO',
}

FIELD_NAMES = [f.name for f in fields(ExifRecord)]


def format_output(results: Dict[Path, Optional[ExifRecord]], format_type: str = "text") -> str:
    """
    Format records based on format type.

    Args:
        results: Mapping of file path to record (None when no metadata)
        format_type: Output format ('text', 'json', 'csv')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        items = []
        for path, record in results.items():
            item = {'SourceFile': str(path)}
            if record is not None:
                item.update(record.to_dict())
            items.append(item)
        return json.dumps(items, indent=2, ensure_ascii=False)
    elif format_type == "csv":
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(['SourceFile'] + FIELD_NAMES)
        for path, record in results.items():
            values = record.to_dict() if record is not None else {}
            writer.writerow([str(path)] + [values.get(name, '') for name in FIELD_NAMES])
        return buffer.getvalue().rstrip("\n")
    else:  # text format (default)
        lines = []
        for path, record in results.items():
            if len(results) > 1:
                lines.append(f"======== {path}")
            if record is None or record.is_empty:
                lines.append("No EXIF metadata")
                continue
            values = record.to_dict()
            width = max(len(label) for label in FIELD_LABELS.values())
            for name, label in FIELD_LABELS.items():
                if name in values:
                    lines.append(f"{label:<{width}} : {values[name]}")
        return "\n".join(lines)


def collect_files(targets: List[str], recurse: bool = False) -> List[Path]:
    """
    Expand command-line targets into a list of files.

    Directories contribute their JPEG files (recursively with ``recurse``).
    """
    files = []
    for target in targets:
        path = Path(target)
        if path.is_dir():
            pattern = '**/*' if recurse else '*'
            for child in sorted(path.glob(pattern)):
                if child.is_file() and FormatDetector.is_supported_media_type(
                        FormatDetector.detect_media_type(file_path=child)):
                    files.append(child)
        else:
            files.append(path)
    return files


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="photoexif",
        description="photoexif - Show capture time, camera and exposure details of JPEG photos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show fields of one photo
  photoexif IMG_0001.jpg

  # JSON for every JPEG under a directory
  photoexif -j -r ~/Pictures
        """
    )
    parser.add_argument('files', nargs='+', help='File(s) or directory(ies) to process')
    parser.add_argument('-r', '--recurse', action='store_true', help='Recursively process directories')
    parser.add_argument('-j', '--json', action='store_true', help='Output in JSON format')
    parser.add_argument('-csv', action='store_true', help='Output in CSV format')
    parser.add_argument('-w', '--workers', type=int, default=DEFAULT_MAX_WORKERS,
                        help=f'Number of files parsed in parallel (default {DEFAULT_MAX_WORKERS})')
    parser.add_argument('--strict', action='store_true',
                        help='Report files that are not JPEG as errors instead of skipping them')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log parse diagnostics to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")

    errors = 0
    files = collect_files(args.files, recurse=args.recurse)

    if args.strict:
        supported = []
        for path in files:
            media_type = FormatDetector.detect_media_type(file_path=path)
            if media_type is not None and not FormatDetector.is_supported_media_type(media_type):
                error = UnsupportedFormatError(f"{path}: unsupported format {media_type}")
                print(f"Error: {error}", file=sys.stderr)
                errors += 1
            else:
                supported.append(path)
        files = supported

    def _report(path: Path, error: Exception) -> None:
        nonlocal errors
        errors += 1
        print(f"Error: {error}", file=sys.stderr)

    results = batch_read_exif(files, max_workers=args.workers, error_handler=_report)

    if args.json:
        format_type = "json"
    elif args.csv:
        format_type = "csv"
    else:
        format_type = "text"

    if results:
        print(format_output(results, format_type))

    return 1 if errors else 0


def run() -> None:
    try:
        sys.exit(main())
    except PhotoExifError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
