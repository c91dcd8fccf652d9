"""External client interfaces."""

from abc import ABC, abstractmethod

from credscore.domain.entities import PolishedText


class TextPolisherClient(ABC):
    """
    Abstract client for an external text rewriter.

    The polisher only improves wording. Its output is untrusted and must
    pass through the output sanitizer before it reaches a user.
    """

    @abstractmethod
    async def polish(
        self,
        entrepreneur_text: str,
        lender_text: str,
        language: str,
    ) -> PolishedText:
        """
        Rewrite both explanation texts for readability.

        Args:
            entrepreneur_text: Template text for the business owner
            lender_text: Template text for the analyst view
            language: Language code of both texts

        Returns:
            PolishedText. On any failure implementations return the input
            texts with polished=False instead of raising.
        """
        ...
