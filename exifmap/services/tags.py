"""
Typed view over the raw tag dictionary.

The extraction step hands over a loosely typed mapping: numbers, text,
booleans, rationals in several encodings and sequences of rationals. The
helpers here turn each value into one of a small closed set of shapes so the
extractors can branch on that instead of probing types ad hoc.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

RawTagDictionary = Mapping[str, Any]

ABSENT = "absent"
NUMERIC = "numeric"
FRACTION = "fraction"
TEXT = "text"
TRIPLE = "triple"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class Fraction:
	numerator: Any
	denominator: Any

	@classmethod
	def coerce(cls, value: Any) -> Optional["Fraction"]:
		if isinstance(value, Fraction):
			return value
		if isinstance(value, Mapping):
			if "numerator" in value or "denominator" in value:
				return cls(value.get("numerator"), value.get("denominator"))
			return None
		if isinstance(value, (tuple, list)):
			if len(value) == 2 and all(_is_number(v) for v in value):
				return cls(value[0], value[1])
			return None
		# Pillow IFDRational and fractions.Fraction
		if isinstance(value, numbers.Rational) and not isinstance(value, numbers.Integral):
			return cls(value.numerator, value.denominator)
		return None


def _is_number(value: Any) -> bool:
	return isinstance(value, numbers.Real) and not isinstance(value, bool)


def classify(value: Any) -> str:
	if value is None:
		return ABSENT
	if isinstance(value, (str, bytes)):
		return TEXT
	if Fraction.coerce(value) is not None:
		return FRACTION
	if _is_number(value):
		return NUMERIC
	if isinstance(value, Sequence) and len(value) == 3:
		return TRIPLE
	return UNKNOWN


def _is_blank(value: Any) -> bool:
	if isinstance(value, bytes):
		value = value.decode("utf-8", errors="ignore")
	return isinstance(value, str) and not value.strip("\x00 \t\r\n")


def first_defined(raw: RawTagDictionary, keys: Sequence[str]) -> Any:
	"""Value of the first candidate key that is present and non-blank."""
	for key in keys:
		value = raw.get(key)
		if value is None or _is_blank(value):
			continue
		return value
	return None


def as_text(value: Any) -> Optional[str]:
	if value is None:
		return None
	if isinstance(value, bytes):
		value = value.decode("utf-8", errors="ignore")
	if not isinstance(value, str):
		value = str(value)
	value = value.strip("\x00 \t\r\n")
	return value or None


def as_int(value: Any) -> Optional[int]:
	if value is None or isinstance(value, bool):
		return None
	if isinstance(value, numbers.Integral):
		return int(value)
	if isinstance(value, float):
		return int(value) if value.is_integer() else None
	if isinstance(value, (list, tuple)) and value:
		return as_int(value[0])
	if isinstance(value, (str, bytes)):
		text = as_text(value)
		if text is None:
			return None
		try:
			return int(text)
		except ValueError:
			return None
	return None


# Candidate keys per domain field, highest priority first
MAKE_KEYS: Tuple[str, ...] = ("Make", "make")
MODEL_KEYS: Tuple[str, ...] = ("Model", "model")
SOFTWARE_KEYS: Tuple[str, ...] = ("Software", "software")
LENS_KEYS: Tuple[str, ...] = ("LensModel", "Lens", "lens")

ISO_KEYS: Tuple[str, ...] = ("ISO", "ISOSpeedRatings", "iso")
FNUMBER_KEYS: Tuple[str, ...] = ("FNumber", "fNumber")
EXPOSURE_KEYS: Tuple[str, ...] = ("ExposureTime", "exposureTime")
FOCAL_LENGTH_KEYS: Tuple[str, ...] = ("FocalLength", "focalLength")
FLASH_KEYS: Tuple[str, ...] = ("Flash", "flash")

WIDTH_KEYS: Tuple[str, ...] = ("PixelXDimension", "ImageWidth", "width")
HEIGHT_KEYS: Tuple[str, ...] = ("PixelYDimension", "ImageHeight", "height")
ORIENTATION_KEYS: Tuple[str, ...] = ("Orientation", "orientation")

# DateTimeDigitized is the name piexif uses for the creation timestamp
DATE_KEYS: Tuple[str, ...] = ("DateTimeOriginal", "DateTime", "CreateDate", "DateTimeDigitized", "ModifyDate")

ALTITUDE_KEYS: Tuple[str, ...] = ("GPSAltitude", "altitude")
ALTITUDE_REF_KEYS: Tuple[str, ...] = ("GPSAltitudeRef", "altitudeRef")
