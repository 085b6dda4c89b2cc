"""
Inspect Images - batch metadata dump

Prints the normalized metadata record of one image, or of every supported
image in a folder, as JSON. Runs the same pipeline as the HTTP service.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from exifmap.logging_setup import init_logging
from exifmap.services.errors import ImageDecodeError
from exifmap.services.extraction import inspect_image_bytes


SUPPORTED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".tif", ".tiff", ".webp", ".heic", ".heif"}


def list_image_files(folder: Path) -> List[Path]:
    return sorted([p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_IMAGE_EXTS])


def inspect_path(path: Path, include_exif: bool = False) -> Dict[str, Any]:
    data = path.read_bytes()
    last_modified = int(path.stat().st_mtime * 1000)
    try:
        record = inspect_image_bytes(data, path.name, last_modified=last_modified)
    except ImageDecodeError as e:
        return {"name": path.name, "error": str(e)}
    out = record.to_dict()
    if not include_exif:
        out.pop("exif", None)
    return out


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print normalized image metadata as JSON")
    parser.add_argument("path", help="Image file or folder of images")
    parser.add_argument("--exif", action="store_true", help="Include the raw tag dictionary")
    parser.add_argument("--log-level", default="WARNING", help="loguru level for diagnostics on stderr")
    args = parser.parse_args(argv)

    init_logging(None, args.log_level)

    target = Path(args.path)
    if target.is_dir():
        paths = list_image_files(target)
        if not paths:
            print(f"No images found in: {target}", file=sys.stderr)
            return 1
    elif target.is_file():
        paths = [target]
    else:
        print(f"No such file or folder: {target}", file=sys.stderr)
        return 1

    records = [inspect_path(p, include_exif=bool(args.exif)) for p in paths]
    print(json.dumps(records if len(records) > 1 else records[0], indent=2, ensure_ascii=False))
    return 0 if all("error" not in r for r in records) else 2


if __name__ == "__main__":
    raise SystemExit(main())
