"""Configuration management for the calculator engine."""
import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ERROR_MARKER = os.getenv("ERROR_MARKER", "Error")
SHOW_ERROR_DETAIL = os.getenv("SHOW_ERROR_DETAIL", "false").lower() in ("1", "true", "yes")

MAX_NESTING_DEPTH = int(os.getenv("MAX_NESTING_DEPTH", "100"))
TRACE_LIMIT = int(os.getenv("TRACE_LIMIT", "1000"))
