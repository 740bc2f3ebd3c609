# /app/core/config.py

"""
Central place for every environment-driven setting of the tracker.

Values are read once at import time. A local `.env` file is honoured for
development; in deployment the variables come from the host environment.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tracker.db")

# --- Authentication ---
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
PASSWORD_RESET_EXPIRY_MINUTES = int(os.getenv("PASSWORD_RESET_EXPIRY_MINUTES", "60"))
MIN_PASSWORD_LENGTH = 6

# --- Groups ---
DEFAULT_GOOGLE_FORM_LINK = os.getenv(
    "DEFAULT_GOOGLE_FORM_LINK",
    "https://docs.google.com/forms/d/e/1FAIpQLScbBUjXVj2N5X4R102bULi01cOy9fslasJTHbQgAkTomxAK9w/viewform?usp=header",
)
GROUP_SIZE = 2

# --- Google Sheets (weekly report read-through) ---
GOOGLE_SHEETS_CREDENTIALS_PATH = os.getenv("GOOGLE_SHEETS_CREDENTIALS_PATH", "./credentials/google-service-account.json")
GOOGLE_SHEETS_SPREADSHEET_ID = os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID")
GOOGLE_SHEETS_RANGE = os.getenv("GOOGLE_SHEETS_RANGE", "Sheet1!A1:Z1000")
SHEET_REG_NO_COLUMN = os.getenv("SHEET_REG_NO_COLUMN", "Registration Number")

# --- HTTP ---
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
