"""Logging initialization using loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def init_logging(log_dir: Optional[str] = None, level: str = "INFO") -> None:
	"""Route logs to stderr and, when `log_dir` is given, a rotating file."""
	logger.remove()
	logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)
	if not log_dir:
		return
	log_path = Path(log_dir)
	log_path.mkdir(parents=True, exist_ok=True)
	logger.add(
		str(log_path / "exifmap_{time:YYYYMMDD}.log"),
		rotation="10 MB",
		retention="10 days",
		compression="zip",
		enqueue=True,
		backtrace=False,
		diagnose=False,
		level=level,
	)
