"""
Configuration module for the Desteli Studio site backend
Centralizes environment variables and fixed constants
"""
import os
import logging

logger = logging.getLogger(__name__)

# Environment variables
DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data"))
LINK_STORE_BACKEND = os.getenv("LINK_STORE_BACKEND", "json")  # "json" or "mongo"
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "desteli_site_db")
SITE_NAME = os.getenv("SITE_NAME", "DESTELISTUDIO")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

# Persisted collections
APP_LINKS_FILENAME = "app-links.json"
DELETION_REQUESTS_FILENAME = "deletion-requests.json"
APP_LINKS_KEY = "app-links"
DELETION_REQUESTS_KEY = "deletion-requests"

# Redirect page
REDIRECT_DELAY_MS = 1000  # fixed for every record

if LINK_STORE_BACKEND not in ("json", "mongo"):
    logger.warning(f"Unknown LINK_STORE_BACKEND '{LINK_STORE_BACKEND}', falling back to json")
    LINK_STORE_BACKEND = "json"
