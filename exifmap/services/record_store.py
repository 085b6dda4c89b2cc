from __future__ import annotations

import json
import os
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from exifmap import config


def _slugify(text: str) -> str:
	return "".join(ch if (ch.isalnum() or ch in ("-", "_")) else "-" for ch in text).strip("-_").lower()


def _records_dir(base: Optional[Path]) -> Path:
	records_dir = Path(base) if base is not None else Path(config.RECORDS_DIR)
	records_dir.mkdir(parents=True, exist_ok=True)
	return records_dir


def _record_path(session_id: str, base: Optional[Path]) -> Path:
	return _records_dir(base) / f"{_slugify(session_id) or 'default'}.json"


def write_record(session_id: str, data: Dict[str, Any], base: Optional[Path] = None) -> None:
	"""Replace the session's current record wholesale."""
	record_path = _record_path(session_id, base)
	# unique per writer so concurrent uploads to one session never share a temp file
	tmp_path = record_path.with_name(f"{record_path.stem}.{uuid.uuid4().hex}.tmp")
	with tmp_path.open("w", encoding="utf-8") as f:
		json.dump(data, f, indent=2, ensure_ascii=False)
	os.replace(tmp_path, record_path)


def read_record(session_id: str, base: Optional[Path] = None) -> Dict[str, Any]:
	record_path = _record_path(session_id, base)
	if not record_path.exists():
		return {"session": session_id, "status": "empty"}
	with record_path.open("r", encoding="utf-8") as f:
		return json.load(f)


def discard_record(session_id: str, base: Optional[Path] = None) -> bool:
	record_path = _record_path(session_id, base)
	if not record_path.exists():
		return False
	record_path.unlink()
	logger.debug("Discarded record for session {}", session_id)
	return True
