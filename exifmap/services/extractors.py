"""
Camera, exposure-settings and dimension extraction.

Each tag may appear under several spellings depending on the extractor that
produced the dictionary; the candidate tables in ``tags`` fix the priority.
Every field is independently optional and a record with no fields at all is
reported as None.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from exifmap.services.numeric import format_number, round_half_up, to_float
from exifmap.services.record import CameraInfo, Dimensions, ImageSettings
from exifmap.services.tags import (
	EXPOSURE_KEYS,
	FLASH_KEYS,
	FNUMBER_KEYS,
	FOCAL_LENGTH_KEYS,
	HEIGHT_KEYS,
	ISO_KEYS,
	LENS_KEYS,
	MAKE_KEYS,
	MODEL_KEYS,
	ORIENTATION_KEYS,
	SOFTWARE_KEYS,
	WIDTH_KEYS,
	RawTagDictionary,
	as_int,
	as_text,
	first_defined,
)

FLASH_DESCRIPTIONS: Dict[int, str] = {
	0: "No Flash",
	1: "Flash Fired",
	5: "Flash Fired, Return not detected",
	7: "Flash Fired, Return detected",
	8: "On, Flash did not fire",
	9: "Flash Fired, Compulsory mode",
	16: "Off, Flash did not fire",
	24: "Auto, Flash did not fire",
	25: "Auto, Flash fired",
}

ORIENTATION_DESCRIPTIONS: Dict[int, str] = {
	1: "Normal",
	2: "Mirrored horizontally",
	3: "Rotated 180°",
	4: "Mirrored vertically",
	5: "Mirrored horizontally and rotated 270°",
	6: "Rotated 90°",
	7: "Mirrored horizontally and rotated 90°",
	8: "Rotated 270°",
}


def describe_flash(value: Any) -> Optional[str]:
	if value is None:
		return None
	if isinstance(value, bool):
		return "Flash Fired" if value else "No Flash"
	if isinstance(value, (str, bytes)):
		return as_text(value)
	number = to_float(value)
	code = as_int(value)
	if code is None and number is not None and number.is_integer():
		code = int(number)
	if code is not None and code in FLASH_DESCRIPTIONS:
		return FLASH_DESCRIPTIONS[code]
	if number is not None:
		return f"Flash value: {format_number(number)}"
	if code is not None:
		return f"Flash value: {code}"
	return f"Flash value: {value}"


def describe_orientation(code: Optional[int]) -> str:
	if not code:
		return "Unknown"
	return ORIENTATION_DESCRIPTIONS.get(code, f"Orientation {code}")


def format_aperture(value: Any) -> Optional[str]:
	f_number = to_float(value)
	if not f_number:
		return None
	return f"f/{f_number:.1f}"


def format_exposure(value: Any) -> Optional[str]:
	seconds = to_float(value)
	if not seconds:
		return None
	if seconds >= 1:
		return f"{format_number(seconds)}s"
	return f"1/{round_half_up(1 / seconds)}s"


def format_focal_length(value: Any) -> Optional[str]:
	mm = to_float(value)
	if not mm:
		return None
	return f"{round_half_up(mm)}mm"


def _iso(value: Any) -> Optional[float]:
	if isinstance(value, (list, tuple)) and not isinstance(value, bytes):
		value = value[0] if value else None
	iso = to_float(value)
	if iso is not None and iso.is_integer():
		return int(iso)
	return iso


def extract_camera(raw: RawTagDictionary) -> Optional[CameraInfo]:
	camera = CameraInfo(
		make=as_text(first_defined(raw, MAKE_KEYS)),
		model=as_text(first_defined(raw, MODEL_KEYS)),
		software=as_text(first_defined(raw, SOFTWARE_KEYS)),
		lens=as_text(first_defined(raw, LENS_KEYS)),
	)
	return None if camera == CameraInfo() else camera


def extract_settings(raw: RawTagDictionary) -> Optional[ImageSettings]:
	settings = ImageSettings(
		iso=_iso(first_defined(raw, ISO_KEYS)),
		aperture=format_aperture(first_defined(raw, FNUMBER_KEYS)),
		exposure_time=format_exposure(first_defined(raw, EXPOSURE_KEYS)),
		focal_length=format_focal_length(first_defined(raw, FOCAL_LENGTH_KEYS)),
		flash=describe_flash(first_defined(raw, FLASH_KEYS)),
	)
	return None if settings == ImageSettings() else settings


def _first_positive_int(raw: RawTagDictionary, keys) -> Optional[int]:
	for key in keys:
		n = as_int(raw.get(key))
		if n:
			return n
	return None


def extract_dimensions(raw: RawTagDictionary) -> Optional[Dimensions]:
	width = _first_positive_int(raw, WIDTH_KEYS)
	height = _first_positive_int(raw, HEIGHT_KEYS)
	orientation = as_int(first_defined(raw, ORIENTATION_KEYS))
	if width is None and height is None and orientation is None:
		return None
	return Dimensions(
		width=width,
		height=height,
		orientation=orientation,
		orientation_label=describe_orientation(orientation),
	)
