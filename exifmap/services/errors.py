from __future__ import annotations


class ImageInspectError(Exception):
	"""Base error for the upload/decode step."""


class ImageDecodeError(ImageInspectError):
	def __init__(self, name: str = "", reason: str = "") -> None:
		self.name = name
		self.reason = reason
		super().__init__("could not process image")


class UploadTooLargeError(ImageInspectError):
	def __init__(self, size: int, limit: int) -> None:
		self.size = size
		self.limit = limit
		super().__init__(f"upload of {size} bytes exceeds limit of {limit} bytes")
