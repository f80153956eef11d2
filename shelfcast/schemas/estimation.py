# shelfcast/schemas/estimation.py
"""
Pydantic schemas for the estimation API.
Field names are camelCase on the wire; snake_case is accepted too.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, validator

from shelfcast.models.estimation import (
    EstimateSource,
    EstimationInput,
    EstimationResult,
    parse_purchase_date,
)
from shelfcast.services.expiry_status import ExpiryStatus


# ===== REQUEST SCHEMAS =====

class EstimationRequest(BaseModel):
    """Single item to estimate"""
    name: str = Field(..., min_length=1, max_length=200, description="Item name as captured")
    category: str = Field("", max_length=100, description="Category, e.g. 'Produce'")
    purchased_at: date = Field(..., alias="purchasedAt", description="ISO-8601 purchase date")

    @validator('name')
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @validator('purchased_at', pre=True)
    def validate_purchased_at(cls, v):
        """Accept date-times by keeping their calendar date"""
        return parse_purchase_date(v)

    def to_input(self) -> EstimationInput:
        return EstimationInput(
            name=self.name,
            category=self.category,
            purchased_at=self.purchased_at
        )

    class Config:
        populate_by_name = True


class BatchEstimationRequest(BaseModel):
    """Receipt-style batch of items"""
    items: List[EstimationRequest] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Items to estimate"
    )


# ===== RESPONSE SCHEMAS =====

class ExpiryStatusResponse(BaseModel):
    days_until_expiry: int = Field(..., alias="daysUntilExpiry")
    days_until_restock: int = Field(..., alias="daysUntilRestock")
    expiring_soon: bool = Field(..., alias="expiringSoon")
    expired: bool
    restock_due: bool = Field(..., alias="restockDue")

    @classmethod
    def from_status(cls, status: ExpiryStatus) -> "ExpiryStatusResponse":
        return cls(
            days_until_expiry=status.days_until_expiry,
            days_until_restock=status.days_until_restock,
            expiring_soon=status.expiring_soon,
            expired=status.expired,
            restock_due=status.restock_due
        )

    class Config:
        populate_by_name = True


class EstimationResponse(BaseModel):
    estimated_expiration_at: date = Field(..., alias="estimatedExpirationAt")
    estimated_restock_at: date = Field(..., alias="estimatedRestockAt")
    source: EstimateSource
    status: Optional[ExpiryStatusResponse] = None

    @classmethod
    def from_result(
        cls,
        result: EstimationResult,
        status: Optional[ExpiryStatus] = None
    ) -> "EstimationResponse":
        return cls(
            estimated_expiration_at=result.estimated_expiration_at,
            estimated_restock_at=result.estimated_restock_at,
            source=result.source,
            status=ExpiryStatusResponse.from_status(status) if status else None
        )

    class Config:
        populate_by_name = True


class BatchEstimationResponse(BaseModel):
    results: List[EstimationResponse]


class CategoryDefaultResponse(BaseModel):
    category: str
    shelf_life_days: int = Field(..., alias="shelfLifeDays")
    restock_days: int = Field(..., alias="restockDays")
    keywords: List[str]

    class Config:
        populate_by_name = True
