from __future__ import annotations

import dataclasses

import pytest

from exifmap.services import assembler
from exifmap.services.assembler import assemble_record
from exifmap.services.record import FileAttributes
from exifmap.services.tags import Fraction

ATTRS = FileAttributes(name="photo.jpg", size=2048, type="image/jpeg", last_modified=1688484600000)


def test_empty_dictionary_gives_sparse_record():
	record = assemble_record(ATTRS, {})
	assert record.location is None
	assert record.date_time is None
	assert record.camera is None
	assert record.settings is None
	assert record.dimensions is None
	assert record.altitude is None
	assert record.copyright is None
	assert record.artist is None
	assert dict(record.raw) == {}
	assert record.issues == ()


def test_none_dictionary_is_treated_as_empty():
	record = assemble_record(ATTRS, None)
	assert record.location is None
	assert record.file == ATTRS


def test_canon_rational_aperture_without_altitude():
	raw = {"Make": "Canon", "FNumber": {"numerator": 28, "denominator": 10}}
	record = assemble_record(ATTRS, raw)
	assert record.camera.make == "Canon"
	assert record.settings.aperture == "f/2.8"
	assert record.altitude is None
	assert record.location is None


def test_pass_through_fields_and_raw():
	raw = {
		"Copyright": "(c) Someone",
		"Artist": b"Someone\x00",
		"latitude": 1.5,
		"longitude": 2.5,
		"GPSAltitude": Fraction(10, 1),
		"GPSAltitudeRef": 0,
	}
	record = assemble_record(ATTRS, raw)
	assert record.copyright == "(c) Someone"
	assert record.artist == "Someone"
	assert (record.location.latitude, record.location.longitude) == (1.5, 2.5)
	assert record.altitude == "10.0m above sea level"
	assert record.raw["Copyright"] == "(c) Someone"


def test_record_is_immutable_and_detached_from_input():
	raw = {"Make": "Nikon"}
	record = assemble_record(ATTRS, raw)
	raw["Make"] = "Changed"
	assert record.raw["Make"] == "Nikon"
	with pytest.raises(TypeError):
		record.raw["Make"] = "x"
	with pytest.raises(dataclasses.FrozenInstanceError):
		record.date_time = "now"


def test_failing_extractor_is_contained(monkeypatch):
	def boom(raw):
		raise RuntimeError("extractor bug")

	monkeypatch.setattr(assembler, "extract_settings", boom)
	record = assemble_record(ATTRS, {"Make": "Canon", "FNumber": 2.8})
	assert record.settings is None
	assert record.camera.make == "Canon"
	assert record.issues == ("settings",)


def test_each_extractor_called_once(monkeypatch):
	calls = []

	def counting(name, fn):
		def wrapper(raw):
			calls.append(name)
			return fn(raw)
		return wrapper

	for name in ("resolve_gps", "format_date_time", "extract_camera", "extract_settings", "extract_dimensions", "format_altitude"):
		monkeypatch.setattr(assembler, name, counting(name, getattr(assembler, name)))
	assemble_record(ATTRS, {"Make": "Canon"})
	assert sorted(calls) == sorted(set(calls))
	assert len(calls) == 6


def test_to_dict_is_json_safe():
	import json

	raw = {
		"FNumber": Fraction(28, 10),
		"GPSLatitude": (Fraction(48, 1), Fraction(51, 1), Fraction(296, 10)),
		"MakerNote": b"\x00abc",
		"Bad": float("nan"),
	}
	out = assemble_record(ATTRS, raw).to_dict()
	json.dumps(out)
	assert out["exif"]["FNumber"] == {"numerator": 28, "denominator": 10}
	assert out["exif"]["GPSLatitude"][2] == {"numerator": 296, "denominator": 10}
	assert out["exif"]["Bad"] is None
	assert out["settings"]["aperture"] == "f/2.8"
	assert out["location"] is None
	assert out["last_modified"] == 1688484600000
