"""Detail lines for display consumers; absent fields produce no line."""

from __future__ import annotations

from typing import List, Tuple

from exifmap.services.record import ImageRecord


def format_file_size(size: int) -> str:
	if size < 1024:
		return f"{size} B"
	if size < 1024 * 1024:
		return f"{size / 1024:.2f} KB"
	return f"{size / (1024 * 1024):.2f} MB"


def detail_lines(record: ImageRecord) -> List[Tuple[str, str]]:
	lines: List[Tuple[str, str]] = [
		("Name", record.file.name),
		("Size", format_file_size(record.file.size)),
	]
	if record.file.type:
		lines.append(("Type", record.file.type))
	if record.date_time:
		lines.append(("Date taken", record.date_time))
	if record.location is not None:
		lines.append(("Latitude", f"{record.location.latitude:.6f}"))
		lines.append(("Longitude", f"{record.location.longitude:.6f}"))
	if record.altitude:
		lines.append(("Altitude", record.altitude))

	camera = record.camera
	if camera is not None:
		for label, value in (("Make", camera.make), ("Model", camera.model), ("Lens", camera.lens), ("Software", camera.software)):
			if value:
				lines.append((label, value))

	settings = record.settings
	if settings is not None:
		if settings.iso is not None:
			lines.append(("ISO", str(settings.iso)))
		for label, value in (
			("Aperture", settings.aperture),
			("Exposure", settings.exposure_time),
			("Focal length", settings.focal_length),
			("Flash", settings.flash),
		):
			if value:
				lines.append((label, value))

	dims = record.dimensions
	if dims is not None:
		if dims.width and dims.height:
			lines.append(("Dimensions", f"{dims.width} × {dims.height}"))
		if dims.orientation:
			lines.append(("Orientation", dims.orientation_label or ""))

	if record.artist:
		lines.append(("Artist", record.artist))
	if record.copyright:
		lines.append(("Copyright", record.copyright))
	return lines
