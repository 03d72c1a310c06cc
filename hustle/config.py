# Configuration settings shared across the application

import os
from pathlib import Path

# Available LLM models
LLM_MODELS = [
    {"id": "gemini-2.0-flash-lite", "name": "Gemini 2.0 Flash Lite (Fast + Cheap)"},
    {"id": "gemini-2.0-flash", "name": "Gemini 2.0 Flash (Fast)"},
    {"id": "gemini-2.5-flash-lite", "name": "Gemini 2.5 Flash Lite (Fast + Cheap)"},
    {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
    {"id": "gemini-2.5-pro", "name": "Gemini 2.5 Pro"},
]

# Default model, overridable per deployment
DEFAULT_MODEL = os.getenv("HUSTLE_MODEL", "gemini-2.5-flash-lite")

# Generation settings
DEFAULT_TEMPERATURE = 0.9
DEFAULT_TOP_P = 0.95
MAX_OUTPUT_TOKENS = 4096

# Name of the prompt template used for idea generation
DEFAULT_PROMPT_TEMPLATE = "daily_hustle"

# Form defaults
DEFAULT_TARGET_AMOUNT = 3
MIN_TARGET_AMOUNT = 0.01

# Local storage
DATA_DIR = Path(os.getenv("HUSTLE_DATA_DIR", "data"))
LOCAL_STORAGE_DIR = DATA_DIR / "local_storage"
SAVED_IDEAS_KEY = "savedHustleIdeas"

APP_TITLE = "Daily Hustle Generator"


def get_api_key():
    """Provider API key, read at call time so tests and shells can set it late."""
    return os.getenv("GEMINI_API_KEY")
