import os
from pathlib import Path

from app.core.env import load_env

load_env()

# Base project directory (pill_reminder_service/)
BASE_DIR = Path(__file__).resolve().parents[2]

PILL_DB_PATH = Path(os.getenv("PILL_DB_PATH") or str(BASE_DIR / "app" / "db" / "pill_reminder.db"))

# notify_due fires once per minute and catches up minutes a late tick jumped over
TICK_INTERVAL_S = float(os.getenv("TICK_INTERVAL_S", "30"))
ENABLE_TICKER = os.getenv("ENABLE_TICKER", "true").lower() == "true"

# optional policy: resolve elapsed pending doses to "skipped"
AUTO_SKIP_PAST_DOSES = os.getenv("AUTO_SKIP_PAST_DOSES", "false").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
