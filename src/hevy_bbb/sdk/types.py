"""
Hevy API types, enums, and constants.

All Hevy-specific codes, page sizes, wrapper keys, and magic values live here.
"""

from enum import Enum


API_URL = "https://api.hevyapp.com/v1"

API_KEY_HEADER = "api-key"


class SetType(str, Enum):
    """Set type codes accepted in routine payloads."""
    WARMUP = "warmup"
    NORMAL = "normal"
    FAILURE = "failure"
    DROPSET = "dropset"


# Page sizes per list endpoint (the API rejects larger values)
TEMPLATES_PAGE_SIZE = 100
FOLDERS_PAGE_SIZE = 10
ROUTINES_PAGE_SIZE = 10

# Top-level keys wrapping request and response bodies
TEMPLATES_KEY = "exercise_templates"
FOLDERS_KEY = "routine_folders"
ROUTINES_KEY = "routines"
FOLDER_KEY = "routine_folder"
ROUTINE_KEY = "routine"
PAGE_COUNT_KEY = "page_count"

LBS_TO_KG = 0.453592
