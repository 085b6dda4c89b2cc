from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from loguru import logger
from starlette.concurrency import run_in_threadpool

from exifmap import config
from exifmap.services.display import detail_lines
from exifmap.services.errors import ImageDecodeError, UploadTooLargeError
from exifmap.services.extraction import inspect_bytes
from exifmap.services.record_store import discard_record, read_record, write_record


router = APIRouter(prefix="/images", tags=["images"])

_GENERIC_TYPES = {"", "application/octet-stream"}


def _check_size(size: int) -> None:
	if size > config.MAX_UPLOAD_BYTES:
		raise UploadTooLargeError(size, config.MAX_UPLOAD_BYTES)


@router.post("/inspect", summary="Upload one image and return its normalized metadata")
async def inspect(
	file: UploadFile = File(...),
	session: str = Form("default"),
	last_modified: Optional[int] = Form(None),
) -> Dict[str, Any]:
	try:
		# multipart parsing already knows the size; skip reading oversized bodies
		if file.size is not None:
			_check_size(file.size)
		data = await file.read()
		_check_size(len(data))
	except UploadTooLargeError as e:
		raise HTTPException(status_code=413, detail=str(e)) from e
	if not data:
		raise HTTPException(status_code=400, detail="empty upload")

	content_type = file.content_type if file.content_type not in _GENERIC_TYPES else None
	name = file.filename or "image"
	try:
		record = await inspect_bytes(data, name, content_type, last_modified)
	except ImageDecodeError as e:
		raise HTTPException(status_code=422, detail=str(e)) from e

	payload = record.to_dict()
	payload["session"] = session
	payload["details"] = [{"label": label, "value": value} for label, value in detail_lines(record)]
	await run_in_threadpool(write_record, session, payload)
	logger.info("Inspected {} ({} bytes) for session {}", name, len(data), session)
	return payload


@router.get("/{session}", summary="Current record for a session")
def current(session: str) -> Dict[str, Any]:
	return read_record(session)


@router.get("/{session}/location", summary="Coordinates for the map view")
def location(session: str) -> Dict[str, Any]:
	data = read_record(session)
	loc = data.get("location")
	if not loc:
		return {"location": None}
	return {"latitude": loc["latitude"], "longitude": loc["longitude"]}


@router.delete("/{session}", summary="Reset a session")
def reset(session: str) -> Dict[str, Any]:
	return {"session": session, "discarded": discard_record(session)}
