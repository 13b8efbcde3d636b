# /tests/test_gemini_service.py

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.services import gemini_service
from app.services.gemini_service import ProviderError, ProviderResponseError, ProviderTimeoutError


@pytest.fixture
def mock_genai():
    """Replaces the Gemini client library; the test sets `generate_content_async` on the model."""
    with patch.object(gemini_service, "genai") as genai, patch.object(gemini_service, "GenerationConfig"):
        model = MagicMock()
        genai.GenerativeModel.return_value = model
        yield genai, model


async def _call(timeout=5.0):
    return await gemini_service.generate_json(
        "prompt", api_key="k", model_name="gemini-test", system_instruction="system", timeout=timeout
    )


async def test_returns_decoded_object(mock_genai):
    genai, model = mock_genai
    model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text='{"files": [], "explanation": "e"}', usage_metadata=None))

    payload = await _call()

    assert payload == {"files": [], "explanation": "e"}
    genai.configure.assert_called_once_with(api_key="k")
    genai.GenerativeModel.assert_called_once_with("gemini-test", system_instruction="system")


async def test_invalid_json_raises_response_error(mock_genai):
    _, model = mock_genai
    model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text="Sure! Here is your code:", usage_metadata=None))

    with pytest.raises(ProviderResponseError):
        await _call()


async def test_non_object_json_raises_response_error(mock_genai):
    _, model = mock_genai
    model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text="[1, 2]", usage_metadata=None))

    with pytest.raises(ProviderResponseError):
        await _call()


async def test_empty_text_raises_response_error(mock_genai):
    _, model = mock_genai
    model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text="", usage_metadata=None))

    with pytest.raises(ProviderResponseError):
        await _call()


async def test_slow_provider_times_out(mock_genai):
    _, model = mock_genai

    async def never_answers(*args, **kwargs):
        await asyncio.sleep(10)

    model.generate_content_async = never_answers

    with pytest.raises(ProviderTimeoutError):
        await _call(timeout=0.05)


async def test_client_errors_are_wrapped(mock_genai):
    _, model = mock_genai
    model.generate_content_async = AsyncMock(side_effect=RuntimeError("503 Service Unavailable"))

    with pytest.raises(ProviderError, match="503"):
        await _call()


async def test_client_setup_failure_raises_provider_error(mock_genai):
    genai, _ = mock_genai
    genai.GenerativeModel.side_effect = ValueError("unknown model 'gemini-test'")

    with pytest.raises(ProviderError, match="unknown model"):
        await _call()
