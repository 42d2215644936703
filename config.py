# config.py
# Simple centralized configuration values.
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_FILE = os.getenv("FRIENDFINDER_DB", "friendfinder.db")

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "false").lower() in ("1", "true", "yes")

# Storage keys
USERS_STORAGE_KEY = "friendFinder_users"
SHORTLIST_STORAGE_KEY = "friendFinder_shortlist"
CURRENT_USER_STORAGE_KEY = "friendFinder_currentUser"

# Matchmaking parameters
MIN_COMMON_INTERESTS = 2  # candidates sharing fewer interests are dropped

# Profile validation (applied by the HTTP layer, not the store)
MIN_AGE = 18
MAX_AGE = 100
MIN_PROFILE_INTERESTS = 2
