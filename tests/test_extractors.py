from __future__ import annotations

import pytest

from exifmap.services.extractors import (
	describe_flash,
	describe_orientation,
	extract_camera,
	extract_dimensions,
	extract_settings,
	format_aperture,
	format_exposure,
	format_focal_length,
)
from exifmap.services.record import CameraInfo
from exifmap.services.tags import Fraction


def test_camera_prefers_capitalised_tags():
	raw = {"Make": "Canon", "make": "canon", "model": "EOS R5", "Software": b"Adobe\x00"}
	assert extract_camera(raw) == CameraInfo(make="Canon", model="EOS R5", software="Adobe", lens=None)


@pytest.mark.parametrize(
	"raw, lens",
	[
		({"LensModel": "RF 50mm", "Lens": "x", "lens": "y"}, "RF 50mm"),
		({"Lens": "x", "lens": "y"}, "x"),
		({"lens": "y"}, "y"),
	],
)
def test_lens_priority(raw, lens):
	assert extract_camera(raw).lens == lens


def test_camera_absent_when_nothing_present():
	assert extract_camera({"Make": "  "}) is None


def test_exposure_formatting():
	assert format_exposure(0.004) == "1/250s"
	assert format_exposure(2) == "2s"
	assert format_exposure(Fraction(5, 2)) == "2.5s"
	assert format_exposure((1, 8000)) == "1/8000s"
	assert format_exposure(0) is None
	assert format_exposure(Fraction(1, 0)) is None


def test_aperture_and_focal_length():
	assert format_aperture(2.8) == "f/2.8"
	assert format_aperture({"numerator": 28, "denominator": 10}) == "f/2.8"
	assert format_aperture(0) is None
	assert format_focal_length(Fraction(245, 10)) == "25mm"
	assert format_focal_length(None) is None


@pytest.mark.parametrize(
	"code, text",
	[
		(0, "No Flash"),
		(1, "Flash Fired"),
		(5, "Flash Fired, Return not detected"),
		(7, "Flash Fired, Return detected"),
		(8, "On, Flash did not fire"),
		(9, "Flash Fired, Compulsory mode"),
		(16, "Off, Flash did not fire"),
		(24, "Auto, Flash did not fire"),
		(25, "Auto, Flash fired"),
		(99, "Flash value: 99"),
		(True, "Flash Fired"),
		(False, "No Flash"),
	],
)
def test_flash_table(code, text):
	assert describe_flash(code) == text


def test_flash_zero_is_present_not_absent():
	assert extract_settings({"Flash": 0}).flash == "No Flash"
	assert extract_settings({"flash": 9}).flash == "Flash Fired, Compulsory mode"


@pytest.mark.parametrize(
	"code, text",
	[(1, "Normal"), (3, "Rotated 180°"), (6, "Rotated 90°"), (8, "Rotated 270°"), (0, "Unknown"), (None, "Unknown"), (12, "Orientation 12")],
)
def test_orientation_labels(code, text):
	assert describe_orientation(code) == text


def test_iso_priority_and_sequences():
	assert extract_settings({"ISO": 100, "ISOSpeedRatings": 200, "iso": 300}).iso == 100
	assert extract_settings({"ISOSpeedRatings": (400, 0)}).iso == 400
	assert extract_settings({"iso": 800}).iso == 800


def test_settings_fields_independent():
	settings = extract_settings({"FNumber": Fraction(28, 10), "ExposureTime": "fast"})
	assert settings.aperture == "f/2.8"
	assert settings.exposure_time is None
	assert settings.iso is None
	assert extract_settings({}) is None


def test_dimension_priority():
	raw = {"PixelXDimension": 4000, "PixelYDimension": 3000, "ImageWidth": 160, "ImageHeight": 120, "width": 10, "height": 5}
	dims = extract_dimensions(raw)
	assert (dims.width, dims.height) == (4000, 3000)
	dims = extract_dimensions({"ImageWidth": 160, "ImageHeight": 120, "width": 10, "height": 5})
	assert (dims.width, dims.height) == (160, 120)
	dims = extract_dimensions({"PixelXDimension": 0, "width": 10, "height": 5, "Orientation": 6})
	assert (dims.width, dims.height) == (10, 5)
	assert dims.orientation == 6
	assert dims.orientation_label == "Rotated 90°"


def test_dimensions_absent():
	assert extract_dimensions({}) is None


def test_flash_rationals_resolve_to_codes():
	assert describe_flash(Fraction(16, 1)) == "Off, Flash did not fire"
	assert describe_flash({"numerator": 9, "denominator": 1}) == "Flash Fired, Compulsory mode"
	assert describe_flash(Fraction(33, 2)) == "Flash value: 16.5"
