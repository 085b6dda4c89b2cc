from __future__ import annotations

import io
from typing import Any, Dict, Optional

import piexif
import pytest
from PIL import Image


def make_jpeg(exif_dict: Optional[Dict[str, Any]] = None, size=(120, 80)) -> bytes:
	image = Image.new("RGB", size, color=(12, 34, 56))
	buf = io.BytesIO()
	if exif_dict is None:
		image.save(buf, format="JPEG")
	else:
		image.save(buf, format="JPEG", exif=piexif.dump(exif_dict))
	return buf.getvalue()


def eiffel_exif() -> Dict[str, Any]:
	return {
		"0th": {
			piexif.ImageIFD.Make: b"Canon",
			piexif.ImageIFD.Model: b"Canon EOS 5D Mark IV",
			piexif.ImageIFD.Software: b"Firmware 1.0.2",
			piexif.ImageIFD.Orientation: 6,
			piexif.ImageIFD.Artist: b"Jane Doe",
			piexif.ImageIFD.Copyright: b"(c) Jane Doe",
		},
		"Exif": {
			piexif.ExifIFD.DateTimeOriginal: b"2023:07:04 15:30:00",
			piexif.ExifIFD.FNumber: (28, 10),
			piexif.ExifIFD.ExposureTime: (1, 250),
			piexif.ExifIFD.FocalLength: (50, 1),
			piexif.ExifIFD.ISOSpeedRatings: 200,
			piexif.ExifIFD.Flash: 16,
			piexif.ExifIFD.PixelXDimension: 6720,
			piexif.ExifIFD.PixelYDimension: 4480,
			piexif.ExifIFD.LensModel: b"EF24-70mm f/2.8L II USM",
		},
		"GPS": {
			piexif.GPSIFD.GPSLatitudeRef: b"N",
			piexif.GPSIFD.GPSLatitude: ((48, 1), (51, 1), (296, 10)),
			piexif.GPSIFD.GPSLongitudeRef: b"E",
			piexif.GPSIFD.GPSLongitude: ((2, 1), (17, 1), (402, 10)),
			piexif.GPSIFD.GPSAltitude: (35, 1),
			piexif.GPSIFD.GPSAltitudeRef: 0,
		},
		"1st": {},
		"thumbnail": None,
	}


@pytest.fixture
def eiffel_jpeg() -> bytes:
	return make_jpeg(eiffel_exif())


@pytest.fixture
def plain_jpeg() -> bytes:
	return make_jpeg()


@pytest.fixture
def records_dir(tmp_path, monkeypatch):
	from exifmap import config

	path = tmp_path / "records"
	monkeypatch.setattr(config, "RECORDS_DIR", str(path))
	return path


@pytest.fixture
def client(records_dir):
	from fastapi.testclient import TestClient

	from exifmap.main import create_app

	return TestClient(create_app())
