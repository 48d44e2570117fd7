# digipin_api/config.py
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file for local development
load_dotenv()

# --- Configuration ---
APP_TITLE = os.getenv("APP_TITLE", "DIGIPIN API")
API_PREFIX = os.getenv("API_PREFIX", "/api/digipin")
HOST = os.getenv("HOST", "0.0.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma separated; "*" allows every origin
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

try:
    PORT = int(os.getenv("PORT", 3000))
except ValueError:
    raise RuntimeError(f"PORT must be an integer, got {os.getenv('PORT')!r}")

if not isinstance(logging.getLevelName(LOG_LEVEL), int):
    raise RuntimeError(f"Unknown LOG_LEVEL: {LOG_LEVEL}")
