"""Score API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from credscore.application.dto import ScoreRequest
from credscore.application.services import ScoreService
from credscore.core.config import settings
from credscore.core.dependencies import get_score_service
from credscore.core.metrics import record_score, track_score_latency
from credscore.presentation.schemas import (
    ErrorResponseSchema,
    ExplanationSchema,
    LenderExplanationSchema,
    ScoreHistoryResponseSchema,
    ScoreResponseSchema,
    ScoreSummarySchema,
)

score_router = APIRouter(
    prefix="/users/{user_id}/score",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)

UserId = Annotated[
    str,
    Path(min_length=1, max_length=255, description="The user's identifier"),
]
LanguageParam = Annotated[
    str,
    Query(pattern="^(en|nl)$", description="Explanation language"),
]
BusinessTypeParam = Annotated[
    str,
    Query(min_length=1, max_length=100, description="Business type shown in the breakdown"),
]


def _to_schema(response) -> ScoreResponseSchema:
    explanation = response.explanation
    return ScoreResponseSchema(
        snapshot_id=response.snapshot_id,
        user_id=response.user_id,
        as_of_date=response.as_of_date,
        score=response.score,
        confidence=response.confidence,
        band=response.band,
        flags=response.flags,
        feature_breakdown=response.feature_breakdown,
        created_at=response.created_at,
        explanation=ExplanationSchema(
            entrepreneur_text=explanation.entrepreneur_text,
            lender_text=explanation.lender_text,
            lender=LenderExplanationSchema(**explanation.lender),
            breakdown=explanation.breakdown,
            polished=explanation.polished,
            sanitized=explanation.sanitized,
            used_fallback=explanation.used_fallback,
        ),
    )


@score_router.post(
    "",
    response_model=ScoreResponseSchema,
    status_code=200,
    summary="Compute Score",
    description="""
    Recompute the user's score from the last 14 days of entries and the
    latest cash estimate, store it as a new snapshot and explain it.
    """,
)
async def compute_score(
    user_id: UserId,
    score_service: Annotated[ScoreService, Depends(get_score_service)],
    language: LanguageParam = settings.default_language,
    business_type: BusinessTypeParam = settings.default_business_type,
) -> ScoreResponseSchema:
    dto = ScoreRequest(
        user_id=user_id,
        language=language,
        business_type=business_type,
    )

    with track_score_latency():
        response = await score_service.compute(dto)

    record_score(response.score, response.band, response.flags)

    return _to_schema(response)


@score_router.get(
    "",
    response_model=ScoreResponseSchema,
    summary="Get Latest Score",
    description="Return the latest stored score with template explanations.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "No score yet"},
    },
)
async def get_latest_score(
    user_id: UserId,
    score_service: Annotated[ScoreService, Depends(get_score_service)],
    language: LanguageParam = settings.default_language,
    business_type: BusinessTypeParam = settings.default_business_type,
) -> ScoreResponseSchema:
    dto = ScoreRequest(
        user_id=user_id,
        language=language,
        business_type=business_type,
    )

    response = await score_service.get_latest(dto)

    return _to_schema(response)


@score_router.get(
    "/history",
    response_model=ScoreHistoryResponseSchema,
    summary="Get Score History",
    description="Return stored score snapshots, newest first.",
)
async def get_score_history(
    user_id: UserId,
    score_service: Annotated[ScoreService, Depends(get_score_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of snapshots to return"),
    ] = settings.score_history_limit,
) -> ScoreHistoryResponseSchema:
    response = await score_service.get_history(user_id, limit)

    return ScoreHistoryResponseSchema(
        user_id=response.user_id,
        snapshots=[
            ScoreSummarySchema(
                snapshot_id=s.snapshot_id,
                as_of_date=s.as_of_date,
                score=s.score,
                confidence=s.confidence,
                band=s.band,
                flags=s.flags,
                created_at=s.created_at,
            )
            for s in response.snapshots
        ],
    )
