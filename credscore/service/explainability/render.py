"""
Renderings of an ExplainableBreakdown.

The entrepreneur rendering is a short encouraging narrative; the lender
rendering is a neutral analyst summary, available structured or as text.
Both end with the breakdown's disclaimer.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, List

from .breakdown import ExplainableBreakdown
from .labels import SECTION_HEADINGS, Audience


@dataclass(frozen=True)
class LenderExplanation:
    headline: str
    score_line: str
    confidence_line: str
    positive_drivers: List[str]
    negative_drivers: List[str]
    flags: List[str]
    improvements: List[str]
    disclaimer: str

    def to_dict(self) -> dict:
        return asdict(self)


def _section(lines: List[str], heading: str, items: Iterable[str], bullet: str) -> None:
    items = list(items)
    if not items:
        return
    lines.append("")
    lines.append(heading)
    lines.extend(f"{bullet}{item}" for item in items)


def render_for_entrepreneur(breakdown: ExplainableBreakdown) -> str:
    headings = SECTION_HEADINGS[breakdown.language]
    lines = [
        breakdown.headline,
        "",
        breakdown.score_line,
        breakdown.confidence_line,
    ]

    _section(lines, headings["going_well"], breakdown.positive_drivers, "• ")
    _section(lines, headings["watch_for"], breakdown.negative_drivers, "• ")
    _section(lines, headings["tips"], breakdown.improvements, "• ")

    lines.append("")
    lines.append(breakdown.disclaimer)
    return "\n".join(lines)


def render_for_lender(breakdown: ExplainableBreakdown) -> LenderExplanation:
    return LenderExplanation(
        headline=breakdown.headline,
        score_line=breakdown.score_line,
        confidence_line=breakdown.confidence_line,
        positive_drivers=list(breakdown.positive_drivers),
        negative_drivers=list(breakdown.negative_drivers),
        flags=list(breakdown.flags),
        improvements=list(breakdown.improvements),
        disclaimer=breakdown.disclaimer,
    )


def render_for_lender_text(breakdown: ExplainableBreakdown) -> str:
    headings = SECTION_HEADINGS[breakdown.language]
    lines = [
        f"{headings['assessment']} - {breakdown.headline.upper()}",
        "",
        breakdown.score_line,
        breakdown.confidence_line,
    ]

    _section(lines, headings["positive_indicators"], breakdown.positive_drivers, "  + ")
    _section(lines, headings["risk_indicators"], breakdown.negative_drivers, "  - ")
    _section(lines, headings["risk_flags"], breakdown.flags, "  ! ")
    _section(lines, headings["insights"], breakdown.improvements, "  > ")

    lines.append("")
    lines.append(f"{headings['disclaimer']}: {breakdown.disclaimer}")
    return "\n".join(lines)


def render(breakdown: ExplainableBreakdown, audience: Audience) -> str:
    """Text rendering for the given audience."""
    if Audience(audience) == Audience.LENDER:
        return render_for_lender_text(breakdown)
    return render_for_entrepreneur(breakdown)
