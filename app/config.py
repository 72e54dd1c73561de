# app/config.py
import os
from pathlib import Path

APP_NAME = "Typecoach"

# Pause detection
PAUSE_THRESHOLD_MS = 500  # gaps strictly above this are logged as pauses
LONG_PAUSE_MS = 1000  # pauses strictly above this feed the slow-character hint

# Suggestion thresholds
SLOW_WPM = 30
LOW_ACCURACY_PCT = 90

# Live recomputation interval while a session is running
LIVE_TICK_MS = 500

PASSAGES_FILE = Path("assets/texts/passages.txt")
LOG_FILE = Path("app.log")
LOG_LEVEL = os.environ.get("TYPECOACH_LOG_LEVEL", "INFO").upper()
