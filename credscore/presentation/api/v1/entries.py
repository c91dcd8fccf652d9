"""Daily entry and cash estimate API endpoints."""

from datetime import date, datetime
from typing import Annotated, Callable, Optional

from fastapi import APIRouter, Depends, Path, Query

from credscore.application.dto import CashEstimateRequest, EntryRequest
from credscore.application.services import EntryService
from credscore.core.dependencies import get_clock, get_entry_service
from credscore.core.metrics import record_cash_estimate, record_entry_upserted
from credscore.presentation.schemas import (
    CashEstimateRequestSchema,
    CashEstimateResponseSchema,
    EntryListResponseSchema,
    EntryRequestSchema,
    EntryResponseSchema,
    ErrorResponseSchema,
)

entries_router = APIRouter(
    prefix="/users/{user_id}",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)

UserId = Annotated[
    str,
    Path(min_length=1, max_length=255, description="The user's identifier"),
]


def _entry_schema(entry) -> EntryResponseSchema:
    return EntryResponseSchema(
        entry_id=entry.entry_id,
        user_id=entry.user_id,
        date=entry.date,
        revenue_cents=entry.revenue_cents,
        expense_cents=entry.expense_cents,
        expense_note=entry.expense_note,
    )


@entries_router.post(
    "/entries",
    response_model=EntryResponseSchema,
    status_code=200,
    summary="Record Daily Entry",
    description="""
    Record revenue and expenses for one day.

    Writing the same day again replaces the earlier amounts.
    """,
)
async def upsert_entry(
    user_id: UserId,
    request: EntryRequestSchema,
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
) -> EntryResponseSchema:
    dto = EntryRequest(
        user_id=user_id,
        date=request.date,
        revenue_cents=request.revenue_cents,
        expense_cents=request.expense_cents,
        expense_note=request.expense_note,
    )

    response = await entry_service.record_entry(dto)
    record_entry_upserted()

    return _entry_schema(response)


@entries_router.get(
    "/entries",
    response_model=EntryListResponseSchema,
    summary="List Daily Entries",
    description="""
    List a user's entries in an inclusive date range, newest first.

    Defaults to the last 14 days up to today.
    """,
)
async def list_entries(
    user_id: UserId,
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
    from_date: Annotated[
        Optional[date],
        Query(description="First day to include (ISO 8601)"),
    ] = None,
    to_date: Annotated[
        Optional[date],
        Query(description="Last day to include (ISO 8601)"),
    ] = None,
) -> EntryListResponseSchema:
    response = await entry_service.list_entries(user_id, from_date, to_date)

    return EntryListResponseSchema(
        user_id=response.user_id,
        from_date=response.from_date,
        to_date=response.to_date,
        entries=[_entry_schema(e) for e in response.entries],
    )


@entries_router.post(
    "/cash-estimate",
    response_model=CashEstimateResponseSchema,
    status_code=201,
    summary="Record Cash Estimate",
    description="""
    Record how much cash the user has available.

    The latest estimate feeds the buffer feature while it is at most
    7 days old.
    """,
)
async def create_cash_estimate(
    user_id: UserId,
    request: CashEstimateRequestSchema,
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> CashEstimateResponseSchema:
    dto = CashEstimateRequest(
        user_id=user_id,
        as_of_date=request.as_of_date or clock().date(),
        cash_available_cents=request.cash_available_cents,
    )

    response = await entry_service.record_cash_estimate(dto)
    record_cash_estimate()

    return CashEstimateResponseSchema(
        estimate_id=response.estimate_id,
        user_id=response.user_id,
        as_of_date=response.as_of_date,
        cash_available_cents=response.cash_available_cents,
    )
