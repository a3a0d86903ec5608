"""
config.py

Configuration settings for the Tournament of Jazz bracket application.

This file defines:
  - The database connection URL.
  - Admin credentials and the Flask session secret.
  - OAuth2 scopes, credential paths and sheet details for importing artists.
  - Logging configuration for the application.
"""

import os
import logging
import sys

# ------------------------------------------------------------------------
# Database Configuration
# ------------------------------------------------------------------------
# SQLite is used by default; can be overridden by setting the DATABASE_URL environment variable.
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///jazz_bracket.db")

# ------------------------------------------------------------------------
# Admin / Session Configuration
# ------------------------------------------------------------------------
# Admin routes are disabled when no password is configured.
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")
SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
ADMIN_SESSION_DAYS = int(os.environ.get("ADMIN_SESSION_DAYS", "7"))

# Artist catalog used to seed an empty database at startup.
ARTISTS_JSON = os.environ.get("ARTISTS_JSON", "tournament_artists.json")

# ------------------------------------------------------------------------
# Google Sheets OAuth2 Configuration
# ------------------------------------------------------------------------
SCOPES = ['https://www.googleapis.com/auth/spreadsheets.readonly']

# Paths to Google OAuth2 credentials and token files.
GOOGLE_CREDENTIALS_FILE = os.environ.get("GOOGLE_CREDENTIALS_FILE", 'credentials.json')
TOKEN_FILE = os.environ.get("TOKEN_FILE", 'token.json')

# ID of the Google Sheet and the data range holding the artist catalog.
SPREADSHEET_ID = os.environ.get("SPREADSHEET_ID", "")
RANGE_NAME = os.environ.get("RANGE_NAME", "Artists!A1:F")

# ------------------------------------------------------------------------
# Logging Configuration
# ------------------------------------------------------------------------
# Configure logging to output messages to stdout.
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("Jazz-Bracket")
