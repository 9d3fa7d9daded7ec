"""
Gemini client — cheque image bytes → extracted fields.

The model call is the only network dependency of the service. Any failure
is raised as ``ExtractionError`` carrying a user-facing message and hint.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from google import genai
from google.genai import types

from chequeai.config import settings
from chequeai.extraction.json_recovery import parse_extracted_json
from chequeai.extraction.reconciler import DEFAULT_CURRENCY, reconcile
from chequeai.schemas import ExtractionResult

logger = logging.getLogger(__name__)

CHEQUE_PROMPT = """
You are an expert document analyst AI. The image provided is a bank cheque. Extract the following fields accurately:
1. MICR code (bottom line of numbers)
2. Cheque Date
3. Amount in numbers
4. Amount in words
5. Payee name
6. Account number
7. Any visible anti-fraud features (e.g., watermark, microprinting, "payable at par", etc.)

Respond in a structured JSON format with keys: micr_code, cheque_date, amount_number, amount_words, payee_name, account_number, anti_fraud_features.
If any field cannot be extracted, use an empty string for that field.
"""


class ExtractionError(Exception):
    """The model could not be reached or did not answer."""

    def __init__(self, message: str, details: str = "", original_error: Optional[Exception] = None) -> None:
        self.message = message
        self.details = details
        self.original_error = original_error
        super().__init__(message)


def classify_failure(exc: Exception) -> tuple[str, str]:
    """Map an upstream failure to ``(message, details)`` for the API response."""
    text = str(exc).lower()
    code = getattr(exc, "code", None)

    if isinstance(exc, ConnectionError) or "fetch failed" in text or "connection" in text:
        return (
            "Network error - please check your internet connection",
            "The Gemini AI service could not be reached. Please check your connection.",
        )
    if code in (401, 403) or "api key" in text:
        return (
            "API configuration error",
            "Please check your Google Gemini API key configuration.",
        )
    if code == 429 or "quota" in text:
        return (
            "API quota exceeded",
            "Please try again later or check your API usage limits.",
        )
    if isinstance(exc, TimeoutError) or "timeout" in text or "timed out" in text:
        return (
            "Request timeout",
            "The request took too long. Please try again.",
        )
    return (
        "Gemini AI extraction failed",
        "Please check your internet connection and try again.",
    )


def build_extraction(text: str) -> ExtractionResult:
    """Turn a raw model reply into column values; non‑JSON replies give empty fields."""
    parsed = parse_extracted_json(text)
    if parsed is None:
        logger.warning("Model reply is not JSON; storing raw text only (%d chars)", len(text or ""))
    fields = reconcile(None, parsed)
    return ExtractionResult(
        **fields.model_dump(exclude={"currency"}),
        currency_name=DEFAULT_CURRENCY,
        extracted_text=text or "",
    )


class GeminiChequeExtractor:
    def __init__(self, api_key: str, model: str = "gemini-1.5-flash", client: Any = None) -> None:
        self.model = model
        self._client = client
        if self._client is None and api_key:
            self._client = genai.Client(api_key=api_key)

    def extract(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> ExtractionResult:
        if self._client is None:
            raise ExtractionError(
                "Gemini AI service not available",
                "Please check your Google Gemini API key configuration.",
            )

        logger.info("Calling %s (%d bytes, %s)", self.model, len(image_bytes), mime_type)
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=[
                    CHEQUE_PROMPT,
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                ],
            )
            text = response.text or ""
        except Exception as exc:
            logger.exception("Gemini extraction failed")
            message, details = classify_failure(exc)
            raise ExtractionError(message, details, original_error=exc) from exc

        logger.info("Gemini extraction completed (%d chars)", len(text))
        return build_extraction(text)


@lru_cache(maxsize=1)
def get_extractor() -> GeminiChequeExtractor:
    """FastAPI dependency; overridden in tests."""
    return GeminiChequeExtractor(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
