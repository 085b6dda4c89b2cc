from __future__ import annotations

import math
import numbers
from typing import Any, Optional

from loguru import logger

from exifmap.services.tags import Fraction


def to_float(value: Any) -> Optional[float]:
	"""Plain number or rational -> float; None when absent or not computable."""
	if value is None or isinstance(value, bool):
		return None
	frac = Fraction.coerce(value)
	if frac is not None:
		return _fraction_to_float(frac)
	if isinstance(value, numbers.Real):
		x = float(value)
		return x if math.isfinite(x) else None
	return None


def _fraction_to_float(frac: Fraction) -> Optional[float]:
	num, den = frac.numerator, frac.denominator
	if num is None or den is None:
		return None
	if isinstance(num, bool) or isinstance(den, bool):
		return None
	if not isinstance(num, numbers.Real) or not isinstance(den, numbers.Real):
		logger.debug("Non-numeric rational components: {!r}/{!r}", num, den)
		return None
	if not den:
		return None
	x = float(num) / float(den)
	return x if math.isfinite(x) else None


def round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
	if float(value).is_integer():
		return str(int(value))
	return repr(float(value))
