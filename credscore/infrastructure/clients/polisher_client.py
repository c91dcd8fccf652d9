"""HTTP implementation of TextPolisherClient."""

import json
from typing import Any, Dict

import httpx
import structlog

from credscore.core.config import settings
from credscore.core.metrics import record_polish, track_polish_latency
from credscore.domain.entities import PolishedText
from credscore.domain.interfaces import TextPolisherClient
from credscore.service.sanitizer import build_polisher_prompt

logger = structlog.get_logger(__name__)


class PolisherResponseError(ValueError):
    """The polisher replied with something other than the expected JSON."""


class HttpTextPolisherClient(TextPolisherClient):
    """
    HTTP client for an OpenAI-compatible chat completions endpoint.

    The model is asked to return {"entrepreneur": ..., "lender": ...}.
    Every failure (no API key, timeout, HTTP error, unparsable reply)
    degrades to the unpolished texts; the caller always gets a result.
    """

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url or settings.polisher_api_url
        self._api_key = api_key if api_key is not None else settings.polisher_api_key
        self._model = model or settings.polisher_model
        self._timeout = timeout or settings.polisher_timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def polish(
        self,
        entrepreneur_text: str,
        lender_text: str,
        language: str,
    ) -> PolishedText:
        unpolished = PolishedText(
            entrepreneur_text=entrepreneur_text,
            lender_text=lender_text,
            polished=False,
        )

        if not self.enabled:
            logger.debug("polish_skipped", reason="no_api_key")
            record_polish(False)
            return unpolished

        try:
            with track_polish_latency():
                reply = await self._request(entrepreneur_text, lender_text, language)
            result = self._parse_reply(reply)

        except httpx.TimeoutException:
            logger.warning("polish_timeout", timeout=self._timeout)
            record_polish(False)
            return unpolished
        except httpx.HTTPStatusError as e:
            logger.warning(
                "polish_failed",
                status_code=e.response.status_code,
                response=e.response.text[:200],
            )
            record_polish(False)
            return unpolished
        except httpx.HTTPError as e:
            logger.warning("polish_failed", error=str(e), error_type=type(e).__name__)
            record_polish(False)
            return unpolished
        except PolisherResponseError as e:
            logger.warning("polish_unparsable", error=str(e))
            record_polish(False)
            return unpolished

        logger.info("text_polished", model=self._model, language=language)
        record_polish(True)
        return result

    async def _request(
        self,
        entrepreneur_text: str,
        lender_text: str,
        language: str,
    ) -> Dict[str, Any]:
        content = json.dumps(
            {
                "language": language,
                "entrepreneur": entrepreneur_text,
                "lender": lender_text,
            },
            ensure_ascii=False,
        )
        prompt = build_polisher_prompt(content)

        payload = {
            "model": self._model,
            "temperature": settings.polisher_temperature,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
        }

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(
                self._api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
            try:
                return response.json()
            except ValueError as e:
                raise PolisherResponseError("response body is not JSON") from e

    def _parse_reply(self, reply: Dict[str, Any]) -> PolishedText:
        try:
            content = reply["choices"][0]["message"]["content"]
            texts = json.loads(content)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise PolisherResponseError(f"unexpected reply shape: {e}") from e

        if not isinstance(texts, dict):
            raise PolisherResponseError("reply content is not a JSON object")

        entrepreneur = texts.get("entrepreneur")
        lender = texts.get("lender")
        if not isinstance(entrepreneur, str) or not isinstance(lender, str):
            raise PolisherResponseError("reply is missing entrepreneur or lender text")
        if not entrepreneur.strip() or not lender.strip():
            raise PolisherResponseError("reply contains empty text")

        return PolishedText(
            entrepreneur_text=entrepreneur.strip(),
            lender_text=lender.strip(),
            polished=True,
        )
