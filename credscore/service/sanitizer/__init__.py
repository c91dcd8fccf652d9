"""
Output Sanitizer Module for the CredScore engine
"""

from .prohibited_terms import (
    NEUTRAL_REPLACEMENTS,
    PROHIBITED_TERMS,
    SHORT_DISCLAIMER,
    contains_prohibited_terms,
)
from .sanitize import SanitizeResult, ensure_disclaimer, sanitize_output
from .prompts import (
    DECISION_SUPPORT_SYSTEM_PROMPT,
    POLISHER_SYSTEM_PROMPT,
    BuiltPrompt,
    build_polisher_prompt,
)

__all__ = [
    "NEUTRAL_REPLACEMENTS",
    "PROHIBITED_TERMS",
    "SHORT_DISCLAIMER",
    "contains_prohibited_terms",
    "SanitizeResult",
    "ensure_disclaimer",
    "sanitize_output",
    "DECISION_SUPPORT_SYSTEM_PROMPT",
    "POLISHER_SYSTEM_PROMPT",
    "BuiltPrompt",
    "build_polisher_prompt",
]
