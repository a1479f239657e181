"""Application constants and configuration values."""

from core.config import FRONTEND_URL

# Database field lengths
MAX_STRING_LENGTH = 255

# Database connection settings
DB_POOL_RECYCLE_SECONDS = 300  # 5 minutes

# CORS origins for development and production
_CORS_ORIGINS_RAW = [
    "http://localhost:3000",      # Next.js dev server
    FRONTEND_URL,  # Production site URL if FRONTEND_URL is set accordingly
]

# Filter out None values and empty strings to avoid CORS errors
CORS_ORIGINS = list(dict.fromkeys(origin for origin in _CORS_ORIGINS_RAW if origin and origin.strip()))

# Clinic status evaluation
MINUTES_PER_DAY = 24 * 60
STATUS_SOON_WINDOW_MINUTES = 30  # Inclusive window for "opening soon" / "closing soon"
NEXT_OPENING_LOOKAHEAD_DAYS = 7

# Status monitor settings
STATUS_MONITOR_MAX_INSTANCES = 1  # Prevent overlapping refresh runs
