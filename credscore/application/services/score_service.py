"""Score service - orchestrates score computation and explanation."""

from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple

import structlog

from credscore.domain.entities import ScoreSnapshot, utcnow
from credscore.domain.exceptions import (
    InvalidEntryRequestException,
    ScoreNotFoundException,
)
from credscore.domain.interfaces import (
    CashEstimateRepository,
    EntryRepository,
    ScoreSnapshotRepository,
    TextPolisherClient,
)
from credscore.application.dto import (
    ExplanationDTO,
    ScoreHistoryResponse,
    ScoreRequest,
    ScoreResponse,
)
from credscore.core.metrics import record_sanitizer_outcome
from credscore.service.scoring import (
    ScoringSettings,
    compute_score,
    scoring_settings,
)
from credscore.service.scoring.models import CashEstimate as ScoringCashEstimate
from credscore.service.scoring.models import DailyEntry as ScoringEntry
from credscore.service.scoring.models import FeatureVector
from credscore.service.explainability import (
    Audience,
    ExplanationContext,
    Language,
    build_explainable_breakdown,
    render,
    render_for_lender,
)
from credscore.service.sanitizer import ensure_disclaimer, sanitize_output

logger = structlog.get_logger(__name__)


class ScoreService:
    """
    Application service for behavioral score use cases.

    Computing a score reads the user's entries and latest cash estimate,
    runs the scoring engine, appends a snapshot and explains it. Reading a
    score never recomputes.
    """

    def __init__(
        self,
        entry_repository: EntryRepository,
        cash_estimate_repository: CashEstimateRepository,
        score_repository: ScoreSnapshotRepository,
        polisher: Optional[TextPolisherClient] = None,
        clock: Callable[[], datetime] = utcnow,
        settings: ScoringSettings = scoring_settings,
    ):
        self._entry_repo = entry_repository
        self._cash_repo = cash_estimate_repository
        self._score_repo = score_repository
        self._polisher = polisher
        self._clock = clock
        self._settings = settings

    async def compute(self, request: ScoreRequest) -> ScoreResponse:
        """
        Recompute, persist and explain a user's score.

        Args:
            request: The user, explanation language and business type

        Returns:
            ScoreResponse for the new snapshot, with polished and
            sanitized explanations when a polisher is configured

        Raises:
            InvalidEntryRequestException: If request validation fails
        """
        self._validate(request)

        log = logger.bind(user_id=request.user_id)
        now = self._clock()
        today = now.date()

        entries = await self._entry_repo.get_by_user_id(
            request.user_id,
            from_date=today - timedelta(days=self._settings.lookback_days),
            to_date=today,
        )
        cash = await self._cash_repo.get_latest(request.user_id)

        result = compute_score(
            entries=[
                ScoringEntry(
                    date=e.date,
                    revenue_cents=e.revenue_cents,
                    expense_cents=e.expense_cents,
                )
                for e in entries
            ],
            cash_estimate=(
                ScoringCashEstimate(
                    as_of_date=cash.as_of_date,
                    cash_available_cents=cash.cash_available_cents,
                )
                if cash is not None
                else None
            ),
            now=now,
            settings=self._settings,
        )

        snapshot = await self._score_repo.save(
            ScoreSnapshot(
                user_id=request.user_id,
                as_of_date=today,
                score=result.score,
                confidence=result.confidence,
                band=result.band.value,
                flags=list(result.flags),
                feature_breakdown=result.feature_breakdown.to_dict(),
                created_at=now,
            )
        )

        log.info(
            "score_computed",
            entry_count=len(entries),
            has_cash_estimate=cash is not None,
            score=result.score,
            confidence=result.confidence,
            band=result.band.value,
            flags=result.flags,
        )

        explanation = await self._explain(snapshot, request, polish=True)
        return ScoreResponse.from_entity(snapshot, explanation)

    async def get_latest(self, request: ScoreRequest) -> ScoreResponse:
        """
        Return the latest snapshot with template explanations.

        Raises:
            InvalidEntryRequestException: If request validation fails
            ScoreNotFoundException: If the user has no snapshot yet
        """
        self._validate(request)

        snapshot = await self._score_repo.get_latest(request.user_id)
        if snapshot is None:
            logger.info("score_not_found", user_id=request.user_id)
            raise ScoreNotFoundException(request.user_id)

        explanation = await self._explain(snapshot, request, polish=False)
        return ScoreResponse.from_entity(snapshot, explanation)

    async def get_history(self, user_id: str, limit: int = 30) -> ScoreHistoryResponse:
        """
        Return a user's snapshots, newest first.

        Args:
            user_id: The user's identifier
            limit: Maximum number of snapshots to return
        """
        snapshots = await self._score_repo.get_by_user_id(user_id, limit=limit)

        logger.info("score_history_retrieved", user_id=user_id, count=len(snapshots))

        return ScoreHistoryResponse.from_entities(user_id, snapshots)

    def _validate(self, request: ScoreRequest) -> None:
        errors = request.validate()
        if errors:
            raise InvalidEntryRequestException("; ".join(errors))

    async def _explain(
        self,
        snapshot: ScoreSnapshot,
        request: ScoreRequest,
        polish: bool,
    ) -> ExplanationDTO:
        """Build the template explanations and optionally polish them."""
        breakdown = build_explainable_breakdown(
            score=snapshot.score,
            band=snapshot.band,
            confidence=snapshot.confidence / 100,
            features=FeatureVector.from_dict(snapshot.feature_breakdown),
            flags=snapshot.flags,
            context=ExplanationContext(
                lookback_days=self._settings.lookback_days,
                business_type=request.business_type,
            ),
            language=Language(request.language),
        )
        entrepreneur_text = render(breakdown, Audience.ENTREPRENEUR)
        lender_text = render(breakdown, Audience.LENDER)

        polished = False
        if polish and self._polisher is not None:
            result = await self._polisher.polish(
                entrepreneur_text,
                lender_text,
                request.language,
            )
            polished = result.polished
            if polished:
                candidates = (result.entrepreneur_text, result.lender_text)
            else:
                candidates = (entrepreneur_text, lender_text)
        else:
            candidates = (entrepreneur_text, lender_text)

        (entrepreneur_out, lender_out), sanitized, used_fallback = self._sanitize(
            candidates,
            fallbacks=(entrepreneur_text, lender_text),
            append_disclaimer=polished,
        )

        return ExplanationDTO(
            entrepreneur_text=entrepreneur_out,
            lender_text=lender_out,
            lender=render_for_lender(breakdown).to_dict(),
            breakdown=breakdown.to_dict(),
            polished=polished,
            sanitized=sanitized,
            used_fallback=used_fallback,
        )

    def _sanitize(
        self,
        candidates: Tuple[str, str],
        fallbacks: Tuple[str, str],
        append_disclaimer: bool,
    ) -> Tuple[Tuple[str, str], bool, bool]:
        """
        Pass each candidate text through the output sanitizer.

        Returns:
            (texts, any_modified, any_fallback)
        """
        texts = []
        any_modified = False
        any_fallback = False
        for candidate, fallback in zip(candidates, fallbacks):
            outcome = sanitize_output(candidate, fallback)
            record_sanitizer_outcome(outcome.was_modified, outcome.used_fallback)
            any_modified = any_modified or outcome.was_modified
            any_fallback = any_fallback or outcome.used_fallback

            text = outcome.text
            if append_disclaimer:
                text = ensure_disclaimer(text)
            texts.append(text)

        return (texts[0], texts[1]), any_modified, any_fallback
