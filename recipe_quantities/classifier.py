"""Client for the external ingredient classification and price estimation service.

The service is optional. Every public method falls back to local,
deterministic behaviour when the service is unconfigured, slow, failing, or
returns something unexpected; failures are logged, never raised.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

import httpx

from .categories import category_id_from_name, guess_category
from .config import get_classifier_settings
from .logging_config import get_logger
from .recipe_parser import ParsedIngredient, parse_ingredient

logger = get_logger(__name__)

FALLBACK_PRICE = 3.99
FALLBACK_PRICE_RANGE = (2.99, 5.99)


class ClassifierError(Exception):
    """Exception raised when the classification service cannot be used."""

    pass


@dataclass
class IngredientAnalysis:
    """Structured view of one ingredient line, from the service or the local parser."""

    original_text: str
    parsed_name: str
    quantity: float | None
    unit: str | None
    category_id: str
    confidence: float

    def to_parsed(self) -> ParsedIngredient:
        """Convert to a ParsedIngredient for scaling or consolidation."""
        return ParsedIngredient(
            original=self.original_text,
            name=self.parsed_name,
            amount=self.quantity,
            unit=self.unit or None,
        )


@dataclass
class PriceEstimate:
    """Estimated shelf price for a grocery item."""

    item_name: str
    estimated_price: float
    price_min: float
    price_max: float


def fallback_analysis(text: str) -> IngredientAnalysis:
    """Analyze an ingredient line locally, without the service."""
    parsed = parse_ingredient(text)
    return IngredientAnalysis(
        original_text=text,
        parsed_name=parsed.name,
        quantity=parsed.amount,
        unit=parsed.unit,
        category_id=guess_category(parsed.name),
        confidence=0.5 if parsed.amount is not None else 0.3,
    )


def fallback_price_estimate(item_name: str) -> PriceEstimate:
    """Flat default price used when the service is unavailable."""
    low, high = FALLBACK_PRICE_RANGE
    return PriceEstimate(
        item_name=item_name, estimated_price=FALLBACK_PRICE, price_min=low, price_max=high
    )


def _decode_payload(payload: Any) -> Any:
    """Decode a payload that may be a JSON string wrapped in Markdown fences."""
    if not isinstance(payload, str):
        return payload

    cleaned = re.sub(r"```(?:json)?\n?|\n?```", "", payload).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ClassifierError(f"Invalid JSON payload: {e}") from e


def _as_amount(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ClassifierError(f"Invalid quantity: {value!r}")
    try:
        amount = float(value)
    except ValueError as e:
        raise ClassifierError(f"Invalid quantity: {value!r}") from e
    if amount < 0:
        raise ClassifierError(f"Negative quantity: {value!r}")
    return amount


def parse_analysis_response(data: Any, lines: list[str]) -> list[IngredientAnalysis]:
    """
    Convert the service's analysis payload into IngredientAnalysis records.

    Args:
        data: Response body, either {"analysis": [...]} or the bare list
        lines: The ingredient lines that were sent, in order

    Raises:
        ClassifierError: If the payload does not line up with the request
    """
    if isinstance(data, dict):
        data = data.get("analysis")
    items = _decode_payload(data)

    if not isinstance(items, list):
        raise ClassifierError("Analysis response is not a list")
    if len(items) != len(lines):
        raise ClassifierError(f"Expected {len(lines)} analyses, got {len(items)}")

    analyses = []
    for line, item in zip(lines, items):
        if not isinstance(item, dict):
            raise ClassifierError(f"Analysis entry is not an object: {item!r}")

        name = str(item.get("parsed_name") or "").strip()
        if not name:
            raise ClassifierError(f"Analysis for {line!r} has no name")

        unit = item.get("unit")
        confidence = item.get("confidence", 0.0)
        analyses.append(
            IngredientAnalysis(
                original_text=line,
                parsed_name=name,
                quantity=_as_amount(item.get("quantity")),
                unit=str(unit).strip() if unit else None,
                category_id=category_id_from_name(item.get("category")),
                confidence=float(confidence) if isinstance(confidence, (int, float)) else 0.0,
            )
        )

    return analyses


def parse_price_response(data: Any, items: list[str]) -> list[PriceEstimate]:
    """
    Convert the service's price payload into PriceEstimate records.

    Items missing from the payload get the fallback estimate.

    Raises:
        ClassifierError: If the payload is not a list of estimates
    """
    if isinstance(data, dict):
        data = data.get("estimates")
    entries = _decode_payload(data)

    if not isinstance(entries, list):
        raise ClassifierError("Price response is not a list")

    by_name: dict[str, PriceEstimate] = {}
    for entry in entries:
        if not isinstance(entry, dict) or "item_name" not in entry:
            raise ClassifierError(f"Invalid price entry: {entry!r}")
        try:
            price = float(entry["estimated_price"])
            price_range = entry.get("price_range") or {}
            estimate = PriceEstimate(
                item_name=str(entry["item_name"]),
                estimated_price=price,
                price_min=float(price_range.get("min", price)),
                price_max=float(price_range.get("max", price)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ClassifierError(f"Invalid price entry: {entry!r}") from e
        by_name[estimate.item_name.lower()] = estimate

    return [by_name.get(item.lower()) or fallback_price_estimate(item) for item in items]


class IngredientClassifier:
    """Client for the ingredient classification service."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        configured_url, configured_timeout = get_classifier_settings()
        if base_url is None:
            base_url = configured_url
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout if timeout is not None else configured_timeout
        self.client = client or httpx.Client(
            timeout=self.timeout,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def __enter__(self) -> "IngredientClassifier":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    @property
    def is_configured(self) -> bool:
        return self.base_url is not None

    def _post(self, endpoint: str, payload: dict[str, Any]) -> Any:
        """POST to the service and return the decoded JSON body.

        Raises:
            ClassifierError: On any transport, status, or decoding failure
        """
        if not self.base_url:
            raise ClassifierError("Classifier URL not configured")

        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.client.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise ClassifierError(f"{endpoint} timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise ClassifierError(f"{endpoint} failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ClassifierError(f"{endpoint} failed: {e}") from e
        except ValueError as e:
            raise ClassifierError(f"{endpoint} returned invalid JSON") from e

    def analyze_ingredients(self, lines: list[str]) -> list[IngredientAnalysis]:
        """
        Analyze ingredient lines, falling back to the local parser.

        Args:
            lines: Raw ingredient lines

        Returns:
            One IngredientAnalysis per line, in order
        """
        if not lines:
            return []

        if not self.is_configured:
            return [fallback_analysis(line) for line in lines]

        try:
            data = self._post(
                "analyze-ingredients", {"ingredients": [{"text": line} for line in lines]}
            )
            analyses = parse_analysis_response(data, lines)
        except ClassifierError as e:
            logger.warning(f"Ingredient analysis unavailable, using local parser: {e}")
            return [fallback_analysis(line) for line in lines]

        logger.debug(f"Classified {len(analyses)} ingredients remotely")
        return analyses

    def estimate_prices(self, items: list[str]) -> list[PriceEstimate]:
        """
        Estimate prices for grocery items, falling back to a flat default.

        Args:
            items: Grocery item names

        Returns:
            One PriceEstimate per item, in order
        """
        if not items:
            return []

        if not self.is_configured:
            return [fallback_price_estimate(item) for item in items]

        try:
            data = self._post("estimate-prices", {"items": items})
            return parse_price_response(data, items)
        except ClassifierError as e:
            logger.warning(f"Price estimation unavailable, using default prices: {e}")
            return [fallback_price_estimate(item) for item in items]
