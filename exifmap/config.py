"""
Configuration for the image metadata service.

Values are read from environment variables with defaults suitable for
local development (uvicorn exifmap.main:app --reload).
"""

import os

# Network binding
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Enables reload and verbose logging
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# One JSON record per session lives here
RECORDS_DIR = os.getenv("RECORDS_DIR", "records")

# Unset: log to stderr only
LOG_DIR = os.getenv("LOG_DIR") or None
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

# strftime pattern for parseable capture dates; %c is the locale's long form
DATE_DISPLAY_FORMAT = os.getenv("DATE_DISPLAY_FORMAT", "%c")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
