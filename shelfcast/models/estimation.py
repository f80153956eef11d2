# shelfcast/models/estimation.py
"""
Domain objects passed through the estimation engine.

These are plain dataclasses; the wire format (camelCase JSON) lives in
shelfcast.schemas.estimation.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Union


MAX_SHELF_LIFE_DAYS = 365

# Later purchases would push the expiration cap past date.max
LATEST_PURCHASE_DATE = date.max - timedelta(days=MAX_SHELF_LIFE_DAYS)


class EstimateSource(str, Enum):
    """Which path produced the accepted horizon pair"""
    HEURISTIC = "heuristic"
    EXTERNAL = "external"


class InvalidEstimationInput(ValueError):
    """Raised when an item cannot be estimated (no safe default exists)"""


def parse_purchase_date(value: Union[str, date, datetime]) -> date:
    """
    Normalize a purchase date to a calendar date.

    Accepts a date, a datetime (its own calendar date, no timezone
    conversion) or an ISO-8601 string of either form.
    """
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        parsed = _parse_iso_date(value)

    if parsed > LATEST_PURCHASE_DATE:
        raise InvalidEstimationInput(f"Purchase date too far in the future: {parsed.isoformat()}")
    return parsed


def _parse_iso_date(value) -> date:
    if not isinstance(value, str) or not value.strip():
        raise InvalidEstimationInput(f"Missing purchase date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidEstimationInput(f"Unparseable purchase date: {value!r}") from None


@dataclass(frozen=True)
class EstimationInput:
    name: str
    category: str
    purchased_at: date

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidEstimationInput("Item name must be a non-empty string")
        if self.category is not None and not isinstance(self.category, str):
            raise InvalidEstimationInput("Item category must be a string")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "category", self.category or "")
        object.__setattr__(self, "purchased_at", parse_purchase_date(self.purchased_at))


@dataclass(frozen=True)
class EstimationResult:
    estimated_expiration_at: date
    estimated_restock_at: date
    source: EstimateSource

    def to_dict(self) -> dict:
        """Inbound-call shape: ISO dates and a plain source string"""
        return {
            "estimatedExpirationAt": self.estimated_expiration_at.isoformat(),
            "estimatedRestockAt": self.estimated_restock_at.isoformat(),
            "source": self.source.value,
        }
