"""Test environment: settings are read at import time, so set them before poseidon is imported."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("AUTH_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
