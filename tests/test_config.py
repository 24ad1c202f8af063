"""Tests for the config module."""

import pytest


@pytest.fixture
def clear_env(monkeypatch):
    """Clear any configuration from the environment."""
    monkeypatch.delenv("RECIPE_CLASSIFIER_URL", raising=False)
    monkeypatch.delenv("RECIPE_CLASSIFIER_TIMEOUT", raising=False)
    monkeypatch.delenv("RECIPE_LOG_LEVEL", raising=False)


# ============================================================================
# Classifier Settings Tests
# ============================================================================


class TestGetClassifierSettings:
    """Tests for get_classifier_settings function."""

    def test_defaults(self, clear_env):
        """Should disable the classifier when no URL is set."""
        from recipe_quantities.config import DEFAULT_CLASSIFIER_TIMEOUT, get_classifier_settings

        url, timeout = get_classifier_settings()

        assert url is None
        assert timeout == DEFAULT_CLASSIFIER_TIMEOUT == 30.0

    def test_from_environment(self, clear_env, monkeypatch):
        """Should read URL and timeout from environment variables."""
        monkeypatch.setenv("RECIPE_CLASSIFIER_URL", "https://classifier.example.com")
        monkeypatch.setenv("RECIPE_CLASSIFIER_TIMEOUT", "12.5")

        from recipe_quantities.config import get_classifier_settings

        url, timeout = get_classifier_settings()

        assert url == "https://classifier.example.com"
        assert timeout == 12.5

    def test_blank_url_disables(self, clear_env, monkeypatch):
        """A whitespace-only URL counts as unset."""
        monkeypatch.setenv("RECIPE_CLASSIFIER_URL", "   ")

        from recipe_quantities.config import get_classifier_settings

        url, _ = get_classifier_settings()

        assert url is None

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_invalid_timeout_uses_default(self, clear_env, monkeypatch, raw):
        """Unparsable or non-positive timeouts fall back to the default."""
        monkeypatch.setenv("RECIPE_CLASSIFIER_TIMEOUT", raw)

        from recipe_quantities.config import get_classifier_settings

        _, timeout = get_classifier_settings()

        assert timeout == 30.0


# ============================================================================
# Log Level Tests
# ============================================================================


class TestGetLogLevel:
    """Tests for get_log_level function."""

    def test_default(self, clear_env):
        from recipe_quantities.config import get_log_level

        assert get_log_level() == "WARNING"

    def test_from_environment(self, clear_env, monkeypatch):
        """Should upper-case the configured level."""
        monkeypatch.setenv("RECIPE_LOG_LEVEL", "debug")

        from recipe_quantities.config import get_log_level

        assert get_log_level() == "DEBUG"
