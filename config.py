import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent
DATA_DIR = Path(os.getenv("MUSHAF_DATA_DIR", BASE_DIR / "data"))

# Explicit store file; when empty the default candidate locations are searched
MUSHAF_DB_PATH      = os.getenv("MUSHAF_DB_PATH") or None
LOCAL_STORE_ENABLED = os.getenv("MUSHAF_LOCAL_STORE", "1").lower() not in ("0", "false", "no", "off")

# QUL mushaf edition id (5 = KFGQPC Hafs, 6 = Indopak 15 lines)
MUSHAF_ID = int(os.getenv("MUSHAF_ID", "5"))

QURAN_API      = os.getenv("QURAN_API", "https://api.quran.com/api/v4")
REMOTE_TIMEOUT = float(os.getenv("MUSHAF_REMOTE_TIMEOUT", "10"))
CACHE_SIZE     = int(os.getenv("MUSHAF_CACHE_SIZE", "32"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
