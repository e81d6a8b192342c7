# bookr/services/cover_recognition.py
"""
Book information extraction from cover images.

Two implementations share the ``BookInfoExtractor`` interface:

* ``GeminiBookInfoExtractor`` calls the Gemini ``generateContent`` REST
  endpoint with the image inlined as base64 and a JSON response schema.
* ``StubBookInfoExtractor`` returns a fixed record and is used when no
  API key is configured.

``create_book_info_extractor`` picks one at startup; the rest of the
application only sees the interface.
"""

import base64
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from bookr.core.config import Settings
from bookr.core.exceptions import ExternalServiceError
from bookr.schemas.book_schema import ExtractedBookInfo

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = (
    "Analyze this image of a book cover. Extract the title, author(s), publisher, "
    "and ISBN. Return the result as a JSON object with keys 'title', 'author', "
    "'publisher', and 'isbn'. If a piece of information is not visible, use null "
    "for its value."
)

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "书名", "nullable": True},
        "author": {"type": "STRING", "description": "作者", "nullable": True},
        "publisher": {"type": "STRING", "description": "出版社", "nullable": True},
        "isbn": {"type": "STRING", "description": "ISBN号", "nullable": True},
    },
}

FALLBACK_BOOK_INFO = ExtractedBookInfo(
    title="React权威指南",
    author="Stoyan Stefanov",
    publisher="人民邮电出版社",
    isbn="9787115392634",
)


class BookInfoExtractor(ABC):
    """Reads book metadata from a cover image."""

    name: str = "extractor"

    @abstractmethod
    async def extract_book_info(
        self, image: bytes, mime_type: str = "image/jpeg"
    ) -> Optional[ExtractedBookInfo]:
        """
        Return the extracted fields, or ``None`` when nothing was returned.

        Raises:
            ExternalServiceError: the backing service failed or timed out.
        """

    async def aclose(self) -> None:
        """Release any held resources."""


class StubBookInfoExtractor(BookInfoExtractor):
    name = "stub"

    def __init__(self, fallback: ExtractedBookInfo = FALLBACK_BOOK_INFO):
        self._fallback = fallback

    async def extract_book_info(
        self, image: bytes, mime_type: str = "image/jpeg"
    ) -> Optional[ExtractedBookInfo]:
        logger.warning("Cover recognition is not configured; returning mock data")
        return self._fallback.model_copy()


class GeminiBookInfoExtractor(BookInfoExtractor):
    """Gemini API client.

    Endpoint: {base_url}/models/{model}:generateContent
    Auth: ``x-goog-api-key`` header
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def _build_payload(self, image: bytes, mime_type: str) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": EXTRACTION_PROMPT},
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": base64.b64encode(image).decode("ascii"),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    async def extract_book_info(
        self, image: bytes, mime_type: str = "image/jpeg"
    ) -> Optional[ExtractedBookInfo]:
        logger.debug(f"Gemini request to {self.endpoint} ({len(image)} bytes)")
        try:
            response = await self._client.post(
                self.endpoint,
                json=self._build_payload(image, mime_type),
                headers={"x-goog-api-key": self._api_key},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"Gemini API HTTP {e.response.status_code}", service=self.name
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                f"Gemini API request failed: {e}", service=self.name
            ) from e

        return self._parse_response(response.text)

    def _parse_response(self, raw: str) -> Optional[ExtractedBookInfo]:
        try:
            data = json.loads(raw)
            candidates = data.get("candidates") or []
            if not candidates:
                return None
            parts = candidates[0].get("content", {}).get("parts") or []
            text = "".join(part.get("text", "") for part in parts).strip()
            if not text:
                return None
            return ExtractedBookInfo.model_validate(json.loads(text))
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"Gemini response parsing failed: {raw[:400]}")
            raise ExternalServiceError(
                "Gemini response could not be parsed", service=self.name
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()


def create_book_info_extractor(settings: Settings) -> BookInfoExtractor:
    """Choose the extractor for this process from configuration."""
    if settings.GEMINI_API_KEY:
        logger.info(f"Cover recognition: Gemini ({settings.GEMINI_MODEL})")
        return GeminiBookInfoExtractor(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
        )
    logger.warning("GEMINI_API_KEY is not set; cover recognition returns mock data")
    return StubBookInfoExtractor()
