"""
Gemini API client wrapper.

All three AI-backed operations go through GeminiClient.generate_content,
which uses the async surface of the google-genai SDK so a call suspends the
caller without blocking the event loop.
"""

import logging
import time
from typing import Any, Optional

from google import genai
from google.genai import types as genai_types

from maestrowarmup.config import API_KEY_ENV, get_api_key

logger = logging.getLogger(__name__)


class GeminiClient:
    """Async wrapper for the Gemini API."""

    def __init__(self, api_key: str | None = None, client: Any = None):
        """
        Args:
            api_key: Gemini API key (defaults to the GEMINI_API_KEY env var)
            client: Pre-built genai.Client (or a compatible stand-in); when
                given, no key is required
        """
        if client is None:
            api_key = api_key or get_api_key()
            if not api_key:
                raise ValueError(f"{API_KEY_ENV} not set. Check your .env file.")
            client = genai.Client(api_key=api_key)
        self.client = client

    async def generate_content(
        self,
        model: str,
        parts: list[genai_types.Part],
        config: genai_types.GenerateContentConfig,
    ):
        """Send a single user turn made of ``parts`` and return the raw response."""
        logger.info(f"Calling {model} with {len(parts)} part(s)")
        start_time = time.perf_counter()

        response = await self.client.aio.models.generate_content(
            model=model,
            contents=genai_types.Content(role="user", parts=parts),
            config=config,
        )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"{model} responded in {duration_ms:.0f}ms")
        return response


def get_response_text(response) -> Optional[str]:
    """Return the text of a response, falling back to the first text part."""
    text = getattr(response, "text", None)
    if text is not None:
        return text

    candidates = getattr(response, "candidates", None)
    if candidates:
        content = candidates[0].content
        if content and content.parts:
            return content.parts[0].text
    return None


def get_first_inline_data(response):
    """Return the inline data payload of the first part of the first candidate, if any."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = candidates[0].content
    if not content or not content.parts:
        return None
    inline_data = content.parts[0].inline_data
    if inline_data is None:
        return None
    return inline_data.data
