"""
Raw tag extraction from uploaded image bytes.

Pillow identifies the container; piexif parses the EXIF block
into IFDs which are flattened into a single name -> value dictionary using
piexif's tag names. When piexif cannot read the block, Pillow's own EXIF
view is used instead. Nothing in here interprets the values beyond turning
rationals into ``Fraction`` and ASCII into text; that is the job of the
normalization services.
"""

from __future__ import annotations

import io
from typing import Any, Dict, Mapping, Optional

import piexif
from loguru import logger
from PIL import ExifTags, Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from exifmap.services.assembler import assemble_record
from exifmap.services.errors import ImageDecodeError
from exifmap.services.record import FileAttributes, ImageRecord
from exifmap.services.tags import Fraction

_HEIF_REGISTERED = False
_HEIF_UNAVAILABLE = False

_RATIONAL_TYPES = {piexif.TYPES.Rational, piexif.TYPES.SRational}
_EXIF_IFD_POINTER = 0x8769
_GPS_IFD_POINTER = 0x8825


def _ensure_heif_registered() -> None:
	global _HEIF_REGISTERED, _HEIF_UNAVAILABLE
	if _HEIF_REGISTERED or _HEIF_UNAVAILABLE:
		return
	try:
		from pillow_heif import register_heif_opener  # type: ignore
	except ImportError:
		logger.debug("pillow_heif not installed; HEIC uploads will not decode")
		_HEIF_UNAVAILABLE = True
		return
	register_heif_opener()
	_HEIF_REGISTERED = True


def open_image(data: bytes, name: str = "") -> Image.Image:
	"""Identify the container or raise ImageDecodeError.

	Pixel data is never decoded, so a truncated scan still yields its tags.
	"""
	_ensure_heif_registered()
	try:
		img = Image.open(io.BytesIO(data))
	except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
		logger.info("Could not decode upload {}: {}", name or "<bytes>", e)
		raise ImageDecodeError(name, str(e)) from e
	return img


def _convert_piexif_value(value: Any, tag_type: Optional[int]) -> Any:
	if tag_type in _RATIONAL_TYPES:
		if isinstance(value, tuple) and len(value) == 2 and all(isinstance(v, int) for v in value):
			return Fraction(value[0], value[1])
		if isinstance(value, tuple):
			return tuple(_convert_piexif_value(v, tag_type) for v in value)
	if tag_type == piexif.TYPES.Ascii and isinstance(value, bytes):
		return value.decode("utf-8", errors="ignore").rstrip("\x00").strip()
	return value


def _tags_from_piexif(exif_dict: Mapping[str, Any]) -> Dict[str, Any]:
	tags: Dict[str, Any] = {}
	for ifd_name in ("0th", "Exif", "GPS"):
		ifd = exif_dict.get(ifd_name)
		if not isinstance(ifd, Mapping):
			continue
		tag_map = piexif.TAGS.get(ifd_name, {})
		for tag_id, value in ifd.items():
			info = tag_map.get(tag_id)
			if info is None:
				continue
			tags.setdefault(info["name"], _convert_piexif_value(value, info.get("type")))
	return tags


def _tags_from_pillow(exif: Optional[Image.Exif]) -> Dict[str, Any]:
	tags: Dict[str, Any] = {}
	if not exif:
		return tags
	for tag_id, value in exif.items():
		tags[str(ExifTags.TAGS.get(tag_id, tag_id))] = value
	for tag_id, value in exif.get_ifd(_EXIF_IFD_POINTER).items():
		tags.setdefault(str(ExifTags.TAGS.get(tag_id, tag_id)), value)
	for tag_id, value in exif.get_ifd(_GPS_IFD_POINTER).items():
		tags.setdefault(str(ExifTags.GPSTAGS.get(tag_id, tag_id)), value)
	return tags


def read_raw_tags(img: Image.Image) -> Dict[str, Any]:
	tags: Dict[str, Any] = {}
	exif_bytes = img.info.get("exif")
	if exif_bytes:
		try:
			tags = _tags_from_piexif(piexif.load(exif_bytes))
		except Exception:
			logger.opt(exception=True).debug("piexif failed on embedded EXIF; using Pillow view")
			tags = _tags_from_pillow(img.getexif())
	else:
		tags = _tags_from_pillow(img.getexif())
	tags.setdefault("width", img.width)
	tags.setdefault("height", img.height)
	return tags


def extract_raw_tags(img: Image.Image) -> Dict[str, Any]:
	"""Failure-tolerant tag read: an unreadable EXIF block means no metadata."""
	try:
		return read_raw_tags(img)
	except Exception:
		logger.opt(exception=True).warning("Metadata extraction failed; continuing without tags")
		return {}


def guess_mime(img: Image.Image) -> str:
	return Image.MIME.get(img.format or "", "") or "application/octet-stream"


def inspect_image_bytes(
	data: bytes,
	name: str,
	content_type: Optional[str] = None,
	last_modified: Optional[int] = None,
) -> ImageRecord:
	img = open_image(data, name)
	try:
		raw = extract_raw_tags(img)
		mime = content_type or guess_mime(img)
	finally:
		img.close()
	attrs = FileAttributes(name=name, size=len(data), type=mime, last_modified=last_modified)
	return assemble_record(attrs, raw)


async def inspect_bytes(
	data: bytes,
	name: str,
	content_type: Optional[str] = None,
	last_modified: Optional[int] = None,
) -> ImageRecord:
	"""Decode and normalize off the event loop; the only await in the flow."""
	return await run_in_threadpool(inspect_image_bytes, data, name, content_type, last_modified)
