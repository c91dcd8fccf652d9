"""Entry and cash estimate Pydantic schemas."""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, ConfigDict

# Amounts are stored in 64-bit columns
MAX_CENTS = 2**63 - 1


class EntryRequestSchema(BaseModel):
    """Schema for POST /v1/users/{user_id}/entries request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "date": "2026-03-15",
                    "revenue_cents": 125000,
                    "expense_cents": 48000,
                    "expense_note": "stock",
                }
            ]
        }
    )
    date: datetime.date = Field(
        ...,
        description="Calendar day the entry covers (ISO 8601)",
    )
    revenue_cents: int = Field(
        ...,
        ge=0,
        le=MAX_CENTS,
        description="Revenue for the day in cents",
        examples=[125000],
    )
    expense_cents: int = Field(
        0,
        ge=0,
        le=MAX_CENTS,
        description="Expenses for the day in cents",
        examples=[48000],
    )
    expense_note: Optional[str] = Field(
        None,
        max_length=500,
        description="Free-text note about the expenses",
    )

    @field_validator("expense_note")
    @classmethod
    def strip_note(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank note as no note."""
        if v is None:
            return None
        return v.strip() or None


class EntryResponseSchema(BaseModel):
    """Schema for a stored daily entry."""

    entry_id: str = Field(..., description="UUID of the entry")
    user_id: str = Field(..., description="The user's identifier")
    date: datetime.date = Field(..., description="Calendar day the entry covers")
    revenue_cents: int = Field(..., ge=0)
    expense_cents: int = Field(..., ge=0)
    expense_note: Optional[str] = Field(None)


class EntryListResponseSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/entries response."""

    user_id: str = Field(..., description="The user's identifier")
    from_date: datetime.date = Field(..., description="First day of the range (inclusive)")
    to_date: datetime.date = Field(..., description="Last day of the range (inclusive)")
    entries: list[EntryResponseSchema] = Field(
        ...,
        description="Entries in the range, newest first",
    )


class CashEstimateRequestSchema(BaseModel):
    """Schema for POST /v1/users/{user_id}/cash-estimate request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "cash_available_cents": 350000,
                    "as_of_date": "2026-03-15",
                }
            ]
        }
    )
    cash_available_cents: int = Field(
        ...,
        ge=0,
        le=MAX_CENTS,
        description="Cash available in cents",
        examples=[350000],
    )
    as_of_date: Optional[datetime.date] = Field(
        None,
        description="Day of the estimate (defaults to today)",
    )


class CashEstimateResponseSchema(BaseModel):
    """Schema for a recorded cash estimate."""

    estimate_id: str = Field(..., description="UUID of the estimate")
    user_id: str = Field(..., description="The user's identifier")
    as_of_date: datetime.date = Field(..., description="Day of the estimate")
    cash_available_cents: int = Field(..., ge=0)
