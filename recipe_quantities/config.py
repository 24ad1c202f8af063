"""Configuration for Recipe Quantities."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

APP_NAME = "recipe-quantities"

# Ingredient classification / price estimation service (optional)
DEFAULT_CLASSIFIER_TIMEOUT = 30.0  # seconds

DEFAULT_LOG_LEVEL = "WARNING"


def get_classifier_settings() -> tuple[str | None, float]:
    """Get the classifier base URL and request timeout from the environment.

    An unset or blank URL means the classifier is disabled and the local
    parser is used instead.
    """
    url = os.getenv("RECIPE_CLASSIFIER_URL", "").strip() or None

    timeout = DEFAULT_CLASSIFIER_TIMEOUT
    raw_timeout = os.getenv("RECIPE_CLASSIFIER_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = DEFAULT_CLASSIFIER_TIMEOUT
        if timeout <= 0:
            timeout = DEFAULT_CLASSIFIER_TIMEOUT

    return url, timeout


def get_log_level() -> str:
    """Get the log level name from the environment."""
    return os.getenv("RECIPE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
