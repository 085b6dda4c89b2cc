"""
GPS resolution for raw tag dictionaries.

Two encodings show up in practice: extractors that already resolved the
position expose decimal ``latitude``/``longitude`` fields, while plain EXIF
carries degrees/minutes/seconds rationals plus a hemisphere letter. A
location is only reported when both axes resolve; half a coordinate is
treated the same as none.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from loguru import logger

from exifmap.services.numeric import to_float
from exifmap.services.record import GeoCoordinate
from exifmap.services.tags import (
	ALTITUDE_KEYS,
	ALTITUDE_REF_KEYS,
	FRACTION,
	NUMERIC,
	TRIPLE,
	RawTagDictionary,
	as_int,
	as_text,
	classify,
	first_defined,
)

DECIMAL = "decimal"
DMS = "dms"
ABSENT = "absent"
PARTIAL = "partial"
MALFORMED = "malformed"


@dataclass(frozen=True)
class GpsResolution:
	coordinate: Optional[GeoCoordinate]
	status: str


class _MalformedComponent(ValueError):
	pass


def convert_dms_to_dd(degrees: float, minutes: float, seconds: float, direction: Optional[str]) -> float:
	dd = degrees + minutes / 60.0 + seconds / 3600.0
	if direction in ("S", "W"):
		dd = -dd
	return dd


def _decimal(value: Any) -> Optional[float]:
	if isinstance(value, bool) or not isinstance(value, numbers.Real):
		return None
	x = float(value)
	return x if math.isfinite(x) else None


def _component(value: Any) -> float:
	x = to_float(value)
	if x is None:
		raise _MalformedComponent(repr(value))
	return x


def _dms_parts(value: Any) -> Sequence[float]:
	kind = classify(value)
	if kind == TRIPLE:
		return [_component(v) for v in value]
	if kind in (NUMERIC, FRACTION):
		# a lone rational is degrees only
		return [_component(value), 0.0, 0.0]
	raise _MalformedComponent(repr(value))


def _hemisphere(value: Any) -> Optional[str]:
	text = as_text(value)
	return text.upper()[:1] if text else None


def resolve_gps_detailed(raw: RawTagDictionary) -> GpsResolution:
	lat = _decimal(raw.get("latitude"))
	lon = _decimal(raw.get("longitude"))
	if lat is not None and lon is not None:
		return GpsResolution(GeoCoordinate(latitude=lat, longitude=lon), DECIMAL)

	lat_dms = raw.get("GPSLatitude")
	lon_dms = raw.get("GPSLongitude")
	if lat_dms is None and lon_dms is None:
		if lat is None and lon is None:
			return GpsResolution(None, ABSENT)
		return GpsResolution(None, PARTIAL)
	if lat_dms is None or lon_dms is None:
		return GpsResolution(None, PARTIAL)

	try:
		latitude = convert_dms_to_dd(*_dms_parts(lat_dms), _hemisphere(raw.get("GPSLatitudeRef")))
		longitude = convert_dms_to_dd(*_dms_parts(lon_dms), _hemisphere(raw.get("GPSLongitudeRef")))
	except (TypeError, ValueError, ArithmeticError) as e:
		logger.debug("Unusable GPS triple: {}", e)
		return GpsResolution(None, MALFORMED)
	return GpsResolution(GeoCoordinate(latitude=latitude, longitude=longitude), DMS)


def resolve_gps(raw: RawTagDictionary) -> Optional[GeoCoordinate]:
	return resolve_gps_detailed(raw).coordinate


def format_altitude(raw: RawTagDictionary) -> Optional[str]:
	value = to_float(first_defined(raw, ALTITUDE_KEYS))
	if value is None:
		return None
	ref = first_defined(raw, ALTITUDE_REF_KEYS)
	if isinstance(ref, bytes):
		# piexif packs the ref as a raw byte, other writers as ASCII digits
		ref = ref[0] if ref[:1] in (b"\x00", b"\x01") else as_text(ref)
	below = as_int(ref) == 1
	return "{:.1f}m {} sea level".format(value, "below" if below else "above")
