"""Immutable result records handed to display and map consumers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from exifmap.services.tags import Fraction


@dataclass(frozen=True)
class GeoCoordinate:
	latitude: float
	longitude: float


@dataclass(frozen=True)
class CameraInfo:
	make: Optional[str] = None
	model: Optional[str] = None
	software: Optional[str] = None
	lens: Optional[str] = None


@dataclass(frozen=True)
class ImageSettings:
	iso: Optional[float] = None
	aperture: Optional[str] = None
	exposure_time: Optional[str] = None
	focal_length: Optional[str] = None
	flash: Optional[str] = None


@dataclass(frozen=True)
class Dimensions:
	width: Optional[int] = None
	height: Optional[int] = None
	orientation: Optional[int] = None
	orientation_label: Optional[str] = None


@dataclass(frozen=True)
class FileAttributes:
	name: str
	size: int
	type: str = ""
	# epoch milliseconds
	last_modified: Optional[int] = None


def _empty_raw() -> Mapping[str, Any]:
	return MappingProxyType({})


@dataclass(frozen=True)
class ImageRecord:
	file: FileAttributes
	location: Optional[GeoCoordinate] = None
	date_time: Optional[str] = None
	camera: Optional[CameraInfo] = None
	settings: Optional[ImageSettings] = None
	dimensions: Optional[Dimensions] = None
	altitude: Optional[str] = None
	copyright: Optional[str] = None
	artist: Optional[str] = None
	raw: Mapping[str, Any] = field(default_factory=_empty_raw)
	# names of fields whose extractor failed, as opposed to being absent
	issues: Tuple[str, ...] = ()

	def to_dict(self) -> Dict[str, Any]:
		return {
			"name": self.file.name,
			"size": self.file.size,
			"type": self.file.type,
			"last_modified": self.file.last_modified,
			"location": _section(self.location),
			"date_time": self.date_time,
			"camera": _section(self.camera),
			"settings": _section(self.settings),
			"dimensions": _section(self.dimensions),
			"altitude": self.altitude,
			"copyright": self.copyright,
			"artist": self.artist,
			"exif": {str(k): jsonable(v) for k, v in self.raw.items()},
			"issues": list(self.issues),
		}


def _section(obj: Any) -> Optional[Dict[str, Any]]:
	if obj is None:
		return None
	return {f.name: getattr(obj, f.name) for f in fields(obj)}


def jsonable(value: Any) -> Any:
	"""Best-effort JSON-safe rendering of a raw tag value."""
	if value is None or isinstance(value, (bool, int, str)):
		return value
	if isinstance(value, float):
		return value if math.isfinite(value) else None
	if isinstance(value, bytes):
		return value.decode("utf-8", errors="ignore").rstrip("\x00")
	if isinstance(value, (datetime, date)):
		return value.isoformat()
	if isinstance(value, Mapping):
		return {str(k): jsonable(v) for k, v in value.items()}
	if isinstance(value, (list, tuple)):
		return [jsonable(v) for v in value]
	frac = Fraction.coerce(value)
	if frac is not None:
		return {"numerator": jsonable(frac.numerator), "denominator": jsonable(frac.denominator)}
	return str(value)
