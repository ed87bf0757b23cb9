import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# MongoDB configuration
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "studydeck")

# Redis configuration (server-side sessions)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")

# Session configuration
SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me-in-production")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "studydeck_session")
SESSION_EXPIRY_HOURS = int(os.getenv("SESSION_EXPIRY_HOURS", "24"))
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"
SESSION_ALGORITHM = "HS256"

# OAuth state cookie lives only for the round trip to the provider
OAUTH_STATE_COOKIE_NAME = "studydeck_oauth_state"
OAUTH_STATE_MAX_AGE = int(os.getenv("OAUTH_STATE_MAX_AGE", "600"))

# Google OAuth configuration
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
GOOGLE_CALLBACK_URL = os.getenv("GOOGLE_CALLBACK_URL", "http://localhost:8000/auth/google/callback")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# App configuration
APP_TITLE = "StudyDeck"
APP_VERSION = "1.0"
APP_DESCRIPTION = "Flashcard study web application"
