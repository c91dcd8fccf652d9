"""
Prohibited vocabulary for user-facing text.

Terms that read as advice, an approval or decline decision, an obligation
or a creditworthiness judgement. Matching is case-insensitive and on whole
words only.
"""

import re
from types import MappingProxyType
from typing import List

SHORT_DISCLAIMER = "Decision-support only. Final decisions remain with you."

PROHIBITED_TERMS = (
    "approve",
    "approved",
    "approval",
    "decline",
    "declined",
    "recommend",
    "recommended",
    "recommendation",
    "advise",
    "advice",
    "should",
    "must",
    "eligible",
    "eligibility",
    "creditworthy",
    "creditworthiness",
    "safe",
    "unsafe",
    "guarantee",
    "guaranteed",
    "lender",
    "lending",
    "accepted",
    "rejected",
    "qualify",
    "qualifies",
)

# Terms without an entry here can only be removed by the fallback text
NEUTRAL_REPLACEMENTS = MappingProxyType({
    "approve": "review",
    "approved": "reviewed",
    "approval": "review",
    "decline": "review",
    "declined": "reviewed",
    "recommend": "note",
    "recommended": "noted",
    "recommendation": "observation",
    "advise": "indicate",
    "advice": "information",
    "should": "could",
    "must": "may",
    "eligible": "within the observed range",
    "eligibility": "data coverage",
    "creditworthy": "lower-risk",
    "creditworthiness": "observed risk profile",
    "accepted": "noted",
})


def term_pattern(term: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


_PATTERNS = MappingProxyType({term: term_pattern(term) for term in PROHIBITED_TERMS})


def contains_prohibited_terms(text: str) -> List[str]:
    """Prohibited terms present in `text`, in table order."""
    return [term for term, pattern in _PATTERNS.items() if pattern.search(text)]
