"""Shared fixtures and test configuration."""

import os

# Pin settings BEFORE any tradestats imports so the Settings() singleton
# does not pick up a developer's timezone or .env overrides.
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("LOG_LEVEL", "INFO")
