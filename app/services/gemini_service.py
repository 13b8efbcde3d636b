# /app/services/gemini_service.py

"""
Thin async wrapper around the Gemini API for JSON-mode completions.

Every failure mode is reported as a `ProviderError` subclass so the caller can
decide what to do with it; this module never falls back on its own.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for code-generation provider failures."""

    pass


class ProviderTimeoutError(ProviderError):
    """Raised when the provider does not answer within the configured timeout."""

    pass


class ProviderResponseError(ProviderError):
    """Raised when the provider answers with something that is not a JSON object."""

    pass


async def generate_json(
    prompt: str,
    *,
    api_key: str,
    model_name: str,
    system_instruction: Optional[str] = None,
    temperature: float = 0.2,
    timeout: float = 30.0,
) -> Dict[str, Any]:
    """
    Sends `prompt` to Gemini in JSON mode and returns the decoded object.

    Raises:
        ProviderTimeoutError: the call exceeded `timeout` seconds.
        ProviderResponseError: empty response, invalid JSON, or a non-object payload.
        ProviderError: any other error raised by the client library.
    """
    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(model_name, system_instruction=system_instruction)
        config = GenerationConfig(
            temperature=temperature,
            response_mime_type="application/json",
        )
        response = await asyncio.wait_for(
            model.generate_content_async(prompt, generation_config=config),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise ProviderTimeoutError(f"Gemini did not respond within {timeout:g}s") from e
    except Exception as e:
        raise ProviderError(f"Gemini request failed: {e}") from e

    try:
        text = response.text
    except ValueError as e:
        # Raised by the client when the candidate was blocked or has no parts.
        raise ProviderResponseError(f"Gemini returned no usable content: {e}") from e
    if not text:
        raise ProviderResponseError("Gemini returned an empty response.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProviderResponseError(f"Gemini response is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ProviderResponseError("Gemini response is not a JSON object.")

    usage = getattr(response, "usage_metadata", None)
    if usage:
        logger.debug(
            "[TOKEN-USAGE] Prompt: %s, Completion: %s, Total: %s",
            getattr(usage, "prompt_token_count", 0),
            getattr(usage, "candidates_token_count", 0),
            getattr(usage, "total_token_count", 0),
        )
    return payload
