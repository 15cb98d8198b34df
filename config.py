# config.py
import os

# Base URLs for the ogomovies catalog
# Note: the WordPress REST API lives under /wp-json/wp/v2 on the same host
SITE_BASE_URL = os.getenv("OGOMOVIES_BASE_URL", "https://ogomovies.com.pk").rstrip("/")
API_BASE_URL = f"{SITE_BASE_URL}/wp-json/wp/v2"
SEARCH_ENDPOINT = f"{API_BASE_URL}/search"
MOVIES_ENDPOINT = f"{API_BASE_URL}/movies"

SEARCH_SUBTYPE = "movies"

# Upper bound on search results; also caps concurrent poster lookups
MAX_SEARCH_RESULTS = 10

# Class token carried by the player iframe
STREAM_FRAME_MARKER = "metaframe"

# Which extractor backs the host surfaces: "api" or "site"
EXTRACTOR_MODE = os.getenv("OGOMOVIES_EXTRACTOR", "api").strip().lower()

HTTP_TIMEOUT = float(os.getenv("OGOMOVIES_HTTP_TIMEOUT", "10.0"))
HTTP_RETRIES = int(os.getenv("OGOMOVIES_HTTP_RETRIES", "3"))
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Sentinels substituted for fields that could not be extracted
NOT_AVAILABLE = "N/A"
NO_DESCRIPTION = "No description available"
