"""
google_integration.py

Handles Google Sheets integration for the Tournament of Jazz bracket.
Responsible for authenticating with Google using OAuth2,
fetching the artist catalog from a specified Google Sheets document,
and upserting those artists into the local database.
"""

import os
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from config import SCOPES, GOOGLE_CREDENTIALS_FILE, TOKEN_FILE, SPREADSHEET_ID, RANGE_NAME, logger
from constants import REGIONS, SEEDS_PER_REGION
from db import SessionLocal, Artist

# Sheet columns after the header row.
ARTIST_COLUMNS = ["name", "seed", "region", "bio", "instrument", "era"]

class GoogleSheetsError(Exception):
    """Custom exception for errors during Google Sheets integration."""
    pass

def google_sheets_authenticate():
    """
    Authenticates with Google Sheets using OAuth2.

    Reuses credentials from TOKEN_FILE when present, refreshing them if expired;
    otherwise runs the local-server OAuth flow and stores the new token.

    Returns:
        service: Authenticated Google Sheets service instance.

    Raises:
        GoogleSheetsError: If credentials are missing or authentication fails.
    """
    if not os.path.exists(GOOGLE_CREDENTIALS_FILE):
        message = f"'{GOOGLE_CREDENTIALS_FILE}' not found. Download valid credentials.json from Google Cloud Console."
        logger.error(message)
        raise GoogleSheetsError(message)

    creds = None
    try:
        if os.path.exists(TOKEN_FILE):
            creds = Credentials.from_authorized_user_file(TOKEN_FILE, SCOPES)
        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                flow = InstalledAppFlow.from_client_secrets_file(GOOGLE_CREDENTIALS_FILE, SCOPES)
                creds = flow.run_local_server(port=0)
            with open(TOKEN_FILE, 'w') as token:
                token.write(creds.to_json())
    except Exception as e:
        message = f"Error during OAuth2 flow: {e}"
        logger.error(message)
        raise GoogleSheetsError(message) from e

    try:
        return build('sheets', 'v4', credentials=creds, cache_discovery=False)
    except Exception as e:
        message = f"Error building Google Sheets service: {e}"
        logger.error(message)
        raise GoogleSheetsError(message) from e

def parse_artist_row(row):
    """
    Converts one sheet row into an artist dict.

    Returns:
        dict, or None if the row lacks a name, a seed in 1-16 or a known region.
    """
    if len(row) < 3:
        return None
    values = dict(zip(ARTIST_COLUMNS, (cell.strip() for cell in row)))
    try:
        seed = int(values["seed"])
    except ValueError:
        return None
    region = values["region"].lower()
    if not values["name"] or region not in REGIONS or not 1 <= seed <= SEEDS_PER_REGION:
        return None
    return {
        "name": values["name"],
        "seed": seed,
        "region": region,
        "bio": values.get("bio") or None,
        "instrument": values.get("instrument") or None,
        "era": values.get("era") or None,
    }

def fetch_artists_from_sheets():
    """
    Fetches the artist catalog from the configured Google Sheets document.

    Expects a header row followed by rows of [name, seed, region, bio, instrument, era];
    the last three columns are optional.

    Returns:
        artists_data (list of dict): One dict per valid row.

    Raises:
        GoogleSheetsError: If fetching data fails or no valid rows are found.
    """
    service = google_sheets_authenticate()
    try:
        sheet = service.spreadsheets()
        result = sheet.values().get(spreadsheetId=SPREADSHEET_ID, range=RANGE_NAME).execute()
        values = result.get('values', [])
    except Exception as e:
        message = f"Error fetching data from Google Sheets (ID={SPREADSHEET_ID}, Range={RANGE_NAME}): {e}"
        logger.error(message)
        raise GoogleSheetsError(message) from e

    if not values or len(values) < 2:
        message = f"Google Sheet appears empty or missing data (ID: {SPREADSHEET_ID}, Range: {RANGE_NAME})."
        logger.error(message)
        raise GoogleSheetsError(message)

    artists_data = []
    for idx, row in enumerate(values[1:], start=2):
        artist = parse_artist_row(row)
        if artist is None:
            logger.warning(f"Skipping row {idx}: expected name, seed 1-{SEEDS_PER_REGION} and a known region.")
            continue
        artists_data.append(artist)
    if not artists_data:
        message = "No valid artists extracted from the Google Sheet."
        logger.error(message)
        raise GoogleSheetsError(message)

    logger.info(f"Fetched {len(artists_data)} artists from the sheet.")
    return artists_data

def update_local_db_with_artists(artists_data):
    """
    Upserts artists fetched from Google Sheets, matching existing rows by (region, seed).

    Args:
        artists_data (list of dict): Artist data from fetch_artists_from_sheets().

    Returns:
        int: Number of artists created or updated.
    """
    session = SessionLocal()
    try:
        for record in artists_data:
            artist = session.query(Artist).filter_by(region=record['region'], seed=record['seed']).first()
            if artist:
                for field, value in record.items():
                    setattr(artist, field, value)
            else:
                session.add(Artist(**record))
        session.commit()
        logger.info(f"Upserted {len(artists_data)} artists.")
        return len(artists_data)
    except Exception as e:
        logger.error(f"Error updating local database with artists: {e}")
        session.rollback()
        raise
    finally:
        session.close()
