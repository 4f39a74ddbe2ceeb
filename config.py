"""
Configuration for the pen inventory backend.

Credentials for Firebase and the Sheets API come from the environment
(or a .env file). They are read once at startup; create_app() fails fast
if any required value is missing.
"""

import os

from dotenv import load_dotenv

# Load .env early so environment variables are available for Config class
load_dotenv()


def _optional_float(name: str):
    value = os.environ.get(name)
    return float(value) if value else None


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
    TESTING = False
    PORT = int(os.environ.get("PORT", "3000"))

    # Google Sheets order log
    SHEET_ID = os.environ.get("SHEET_ID")
    SERVICE_EMAIL = os.environ.get("SERVICE_EMAIL")
    SERVICE_KEY = os.environ.get("SERVICE_KEY")
    SHEET_LOG_RANGE = os.environ.get("SHEET_LOG_RANGE", "InventoryLog!A1")

    # Firebase Realtime Database (inventory counters)
    FIREBASE_PROJECT_ID = os.environ.get("FIREBASE_PROJECT_ID")
    FIREBASE_CLIENT_EMAIL = os.environ.get("FIREBASE_CLIENT_EMAIL")
    FIREBASE_PRIVATE_KEY = os.environ.get("FIREBASE_PRIVATE_KEY")
    FIREBASE_DATABASE_URL = os.environ.get("FIREBASE_DATABASE_URL")

    # Staged order expiry in seconds. Unset keeps staged orders until they
    # are finalized or the process restarts.
    STAGED_ORDER_MAX_AGE_SECONDS = _optional_float("STAGED_ORDER_MAX_AGE_SECONDS")


class ProductionConfig(Config):
    """Production configuration."""
    ENVIRONMENT = "production"
    DEBUG = False
    TESTING = False


class DevelopmentConfig(Config):
    """Development configuration."""
    ENVIRONMENT = "development"
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    ENVIRONMENT = "testing"
    DEBUG = False
    TESTING = True
    STAGED_ORDER_MAX_AGE_SECONDS = None
