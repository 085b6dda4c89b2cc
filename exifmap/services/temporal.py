from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from loguru import logger

from exifmap import config
from exifmap.services.tags import DATE_KEYS, RawTagDictionary, as_text, first_defined

# "YYYY:MM:DD HH:MM[:SS]"; trailing subseconds or offsets are ignored
_EXIF_DATETIME = re.compile(r"^(\d{4}):(\d{2}):(\d{2})(?:[ T](\d{2}:\d{2}(?::\d{2})?))?")


def _parse_standard(value: Any) -> Optional[datetime]:
	if isinstance(value, datetime):
		return value
	if isinstance(value, date):
		return datetime(value.year, value.month, value.day)
	text = as_text(value) if isinstance(value, (str, bytes)) else None
	if text is None:
		return None
	try:
		return datetime.fromisoformat(text)
	except ValueError:
		return None


def _reformat_exif(value: Any) -> Optional[str]:
	if not isinstance(value, (str, bytes)):
		return None
	text = as_text(value)
	if text is None:
		return None
	m = _EXIF_DATETIME.match(text)
	if not m:
		return None
	year, month, day, clock = m.groups()
	out = f"{day}/{month}/{year}"
	return f"{out} {clock}" if clock else out


def format_date_time(raw: RawTagDictionary, fmt: Optional[str] = None) -> Optional[str]:
	"""Readable capture time from the first present date tag, or None."""
	value = first_defined(raw, DATE_KEYS)
	if value is None:
		return None
	parsed = _parse_standard(value)
	if parsed is not None:
		try:
			return parsed.strftime(fmt or config.DATE_DISPLAY_FORMAT)
		except ValueError:
			logger.debug("Could not render date {!r}", value)
	formatted = _reformat_exif(value)
	if formatted is None:
		logger.debug("Unrecognised date value {!r}", value)
	return formatted
