import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
repo_root = Path(__file__).resolve().parents[1]
environment = os.getenv("ENVIRONMENT", "development")
env_file = repo_root / f".env.{environment}"
if env_file.exists():
    load_dotenv(env_file, override=True)
else:
    env_path = repo_root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=True)
load_dotenv()


class Config:
    # Backend API
    API_BASE_URL = os.getenv("UDYAMI_API_BASE_URL", "http://localhost:3001/api")
    API_TIMEOUT = float(os.getenv("UDYAMI_API_TIMEOUT", "10"))
    API_MAX_RETRIES = int(os.getenv("UDYAMI_API_MAX_RETRIES", "2"))
    API_RETRY_BACKOFF_FACTOR = float(os.getenv("UDYAMI_API_RETRY_BACKOFF_FACTOR", "0.5"))

    # Local storage
    STORAGE_DIR = os.getenv("UDYAMI_STORAGE_DIR") or str(repo_root / ".udyami_storage")

    # Notification engine
    SELLER_MATCH_DELAY_SECONDS = float(os.getenv("SELLER_MATCH_DELAY_SECONDS", "2"))
    REMINDER_POLL_INTERVAL_SECONDS = float(os.getenv("REMINDER_POLL_INTERVAL_SECONDS", "60"))
    REMINDER_AFTER_HOURS = float(os.getenv("REMINDER_AFTER_HOURS", "24"))
    REMINDER_MODE = os.getenv("REMINDER_MODE", "catch_up")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Constants
    DATABASE_STATUS_REMOTE = "Backend API"
    DATABASE_STATUS_LOCAL = "Local Storage"
