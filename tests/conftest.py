"""Shared fixtures for recipe-quantities tests."""

import logging

import pytest
import respx

from recipe_quantities.classifier import IngredientClassifier
from recipe_quantities.logging_config import PACKAGE_LOGGER

CLASSIFIER_URL = "https://classifier.test/api"


@pytest.fixture(autouse=True)
def clear_classifier_env(monkeypatch):
    """Keep a developer's .env from pointing tests at a real service."""
    monkeypatch.delenv("RECIPE_CLASSIFIER_URL", raising=False)
    monkeypatch.delenv("RECIPE_CLASSIFIER_TIMEOUT", raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging during a test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers = handlers


@pytest.fixture
def mock_httpx():
    """Activate respx mock for HTTP requests."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def classifier():
    """Classifier pointed at the mocked service."""
    client = IngredientClassifier(base_url=CLASSIFIER_URL, timeout=5.0)
    yield client
    client.close()


@pytest.fixture
def offline_classifier():
    """Classifier with no service configured."""
    client = IngredientClassifier(base_url=None)
    yield client
    client.close()


@pytest.fixture
def mock_analysis_response():
    """Analysis payload for "2 cups milk" and "3 eggs"."""
    return {
        "analysis": [
            {
                "original_text": "2 cups milk",
                "parsed_name": "milk",
                "quantity": 2,
                "unit": "cups",
                "category": "Dairy & Eggs",
                "confidence": 0.95,
            },
            {
                "original_text": "3 eggs",
                "parsed_name": "eggs",
                "quantity": 3,
                "unit": "pieces",
                "category": "Dairy & Eggs",
                "confidence": 0.9,
            },
        ]
    }


@pytest.fixture
def mock_price_response():
    """Price payload for milk and eggs."""
    return {
        "estimates": [
            {
                "item_name": "milk",
                "estimated_price": 3.49,
                "price_range": {"min": 2.99, "max": 4.49},
            },
            {"item_name": "eggs", "estimated_price": 4.25, "price_range": {"min": 3.5, "max": 5.0}},
        ]
    }
