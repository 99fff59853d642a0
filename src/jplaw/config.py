import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if exists
load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.getenv("JPLAW_DATA_DIR", PROJECT_ROOT / "data"))
CACHE_DIR = Path(os.getenv("JPLAW_CACHE_DIR", PROJECT_ROOT / "cache"))
SEED_DIR = DATA_DIR / "seed"
DB_PATH = Path(os.getenv("JPLAW_DB_PATH", DATA_DIR / "database.db"))

# e-Gov API
EGOV_API_BASE_URL = "https://laws.e-gov.go.jp/api/1"
EGOV_API_V2_BASE_URL = "https://laws.e-gov.go.jp/api/2"
EGOV_LAW_URL = "https://laws.e-gov.go.jp/law"

# User Agent
USER_AGENT = "jplaw/0.1.0"

# Database freshness warning threshold
STALENESS_THRESHOLD_DAYS = 30
