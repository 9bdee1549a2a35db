"""
Configuration module for the CoFound Backend API.
Loads settings from the environment (and .env) and defines constants.
"""

import re

from cofound_core.config import Settings, load_settings

settings: Settings = load_settings()

# Number of ranked matches returned and persisted per request
MATCH_LIMIT = 20

# UUID validation pattern
UUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.I)


def is_valid_uuid(value: str) -> bool:
    """Check if a string is a valid UUID format."""
    return bool(UUID_PATTERN.match(value))
