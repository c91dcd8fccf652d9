"""Result of an external text polishing request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PolishedText:
    """
    Entrepreneur and lender texts after polishing.

    `polished` is False when the polisher was disabled or failed and the
    texts are the unmodified templates.
    """

    entrepreneur_text: str
    lender_text: str
    polished: bool = False
