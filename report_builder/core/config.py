# report_builder/core/config.py
"""Environment-driven settings for the report builder."""

import os
from dotenv import load_dotenv

load_dotenv()

# ===== LOG STORE =====
# Request/response logs written by the logging middleware
LOG_DATABASE_URL = os.getenv("LOG_DATABASE_URL", "sqlite:///./report_builder_logs.db")
APPLICATION_ID = os.environ.get("APPLICATION_ID", "Unknown")

# ===== REPORT DEFAULTS =====
DEFAULT_ROW_LIMIT = int(os.getenv("REPORT_DEFAULT_ROW_LIMIT", "50"))
DEFAULT_COLUMN_COUNT = 6  # columns projected when the caller selects none
QUERY_TEXT_ROW_CAP = 100  # trailing LIMIT of the rendered query text

# ===== SAMPLE DATA =====
SAMPLE_DATA_SEED = int(os.getenv("SAMPLE_DATA_SEED", "42"))

# ===== SERVER =====
HOST = os.getenv("REPORT_BUILDER_HOST", "0.0.0.0")
PORT = int(os.getenv("REPORT_BUILDER_PORT", "8000"))
