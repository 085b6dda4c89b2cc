from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, List, Optional

from loguru import logger

from exifmap.services.extractors import extract_camera, extract_dimensions, extract_settings
from exifmap.services.gps import format_altitude, resolve_gps
from exifmap.services.record import FileAttributes, ImageRecord
from exifmap.services.tags import RawTagDictionary, as_text, first_defined
from exifmap.services.temporal import format_date_time


def _guarded(field: str, fn: Callable[[RawTagDictionary], Any], raw: RawTagDictionary, issues: List[str]) -> Any:
	try:
		return fn(raw)
	except Exception:
		logger.opt(exception=True).warning("Extractor for {} failed; field left empty", field)
		issues.append(field)
		return None


def _text_tag(*keys: str) -> Callable[[RawTagDictionary], Optional[str]]:
	return lambda raw: as_text(first_defined(raw, keys))


def assemble_record(file_attrs: FileAttributes, raw: Optional[RawTagDictionary]) -> ImageRecord:
	"""Build the immutable record for one uploaded file.

	Every extractor runs exactly once against the same dictionary. A failing
	extractor only empties its own field and is listed in ``issues``.
	"""
	raw = dict(raw or {})
	issues: List[str] = []
	record = ImageRecord(
		file=file_attrs,
		location=_guarded("location", resolve_gps, raw, issues),
		date_time=_guarded("date_time", format_date_time, raw, issues),
		camera=_guarded("camera", extract_camera, raw, issues),
		settings=_guarded("settings", extract_settings, raw, issues),
		dimensions=_guarded("dimensions", extract_dimensions, raw, issues),
		altitude=_guarded("altitude", format_altitude, raw, issues),
		copyright=_guarded("copyright", _text_tag("Copyright", "copyright"), raw, issues),
		artist=_guarded("artist", _text_tag("Artist", "artist"), raw, issues),
		raw=MappingProxyType(raw),
		issues=tuple(issues),
	)
	logger.debug(
		"Assembled record for {}: location={} camera={} issues={}",
		file_attrs.name,
		record.location is not None,
		record.camera is not None,
		record.issues,
	)
	return record
