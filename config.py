"""
config.py - Application Settings
================================
Defaults for the Flask app.  Any of them can be overridden with an
environment variable carrying the FLOW_ prefix, e.g.

    FLOW_DATA_PATH=/srv/orders.json
    FLOW_CREATE_MISSING_COMMANDS=false
    FLOW_LOG_LEVEL=DEBUG

Values are parsed as JSON where possible (Flask's from_prefixed_env).
"""

import secrets
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


class Config:
    DATA_PATH               = str(BASE_DIR / "data" / "flow.json")
    CREATE_MISSING_COMMANDS = True
    SECRET_KEY              = secrets.token_hex(32)
    LOG_LEVEL               = "INFO"
    LOG_FORMAT              = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
