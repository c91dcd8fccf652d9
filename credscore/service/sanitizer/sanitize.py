"""
Output sanitization.

Any text about to reach a user passes through `sanitize_output`, whether it
came from a template or an external rewriter. Prohibited terms are replaced
from a fixed table; if anything prohibited survives the replacement, the
rewritten text is discarded and the caller's fallback is returned instead.
"""

from dataclasses import dataclass, field
from typing import List

import structlog

from .prohibited_terms import (
    NEUTRAL_REPLACEMENTS,
    SHORT_DISCLAIMER,
    contains_prohibited_terms,
    term_pattern,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class SanitizeResult:
    text: str
    was_modified: bool = False
    terms_found: List[str] = field(default_factory=list)
    used_fallback: bool = False


def sanitize_output(candidate_text: str, fallback_text: str) -> SanitizeResult:
    """
    Remove prohibited vocabulary from candidate text.

    Args:
        candidate_text: Text that may contain prohibited terms
        fallback_text: Clean text returned verbatim if cleaning fails

    Returns:
        SanitizeResult. `used_fallback` is True when the candidate could not
        be fully cleaned; partially cleaned text is never returned.
    """
    terms_found = contains_prohibited_terms(candidate_text)
    if not terms_found:
        return SanitizeResult(text=candidate_text)

    sanitized = candidate_text
    for term in terms_found:
        replacement = NEUTRAL_REPLACEMENTS.get(term)
        if replacement is not None:
            sanitized = term_pattern(term).sub(replacement, sanitized)

    remaining = contains_prohibited_terms(sanitized)
    if remaining:
        logger.warning(
            "sanitizer_fallback_used",
            terms_found=terms_found,
            remaining_terms=remaining,
        )
        return SanitizeResult(
            text=fallback_text,
            was_modified=True,
            terms_found=terms_found,
            used_fallback=True,
        )

    logger.info("output_sanitized", terms_found=terms_found)
    return SanitizeResult(
        text=sanitized,
        was_modified=True,
        terms_found=terms_found,
    )


def ensure_disclaimer(text: str) -> str:
    """Append the short disclaimer unless it is already present."""
    if SHORT_DISCLAIMER in text:
        return text
    return f"{text}\n\n{SHORT_DISCLAIMER}"
