from dataclasses import dataclass
from datetime import date
from typing import Optional

from shelfcast.core.config import settings
from shelfcast.models.estimation import EstimationResult


@dataclass(frozen=True)
class ExpiryStatus:
    days_until_expiry: int
    days_until_restock: int
    expiring_soon: bool
    expired: bool
    restock_due: bool


def expiry_status(
    result: EstimationResult,
    today: Optional[date] = None,
    window_days: Optional[int] = None
) -> ExpiryStatus:
    """Where an estimated item stands relative to `today`"""
    today = today or date.today()
    if window_days is None:
        window_days = settings.expiring_soon_days

    days_until_expiry = (result.estimated_expiration_at - today).days
    days_until_restock = (result.estimated_restock_at - today).days

    return ExpiryStatus(
        days_until_expiry=days_until_expiry,
        days_until_restock=days_until_restock,
        expiring_soon=0 <= days_until_expiry <= window_days,
        expired=days_until_expiry < 0,
        restock_due=days_until_restock <= 0
    )
