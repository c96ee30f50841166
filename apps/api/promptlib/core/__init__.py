"""Core configuration, constants, and shared infrastructure."""

from promptlib.core.config import Settings, get_settings
from promptlib.core.constants import (
    API_PREFIX,
    FOLDER_PARAM,
    SEARCH_PARAM,
    TAG_PARAM,
    UNCATEGORIZED_FOLDER,
)
from promptlib.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "API_PREFIX",
    "FOLDER_PARAM",
    "SEARCH_PARAM",
    "TAG_PARAM",
    "UNCATEGORIZED_FOLDER",
    "limiter",
]
