# /app/services/generation_service.py

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import ValidationError

from ..core.config import Settings
from ..models.generation_model import CodeGenerationResult, GenerateCodeRequest
from . import gemini_service, prompt_library
from .gemini_service import ProviderError
from .mock_generator import generate_mock_code

logger = logging.getLogger(__name__)

GenerationSource = Literal["provider", "fallback"]


@dataclass(frozen=True)
class ProviderAttempt:
    """Result of asking the provider: either a validated result or the reason it failed."""
    result: Optional[CodeGenerationResult] = None
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class GenerationOutcome:
    result: CodeGenerationResult
    source: GenerationSource


class CodeGenerationService:
    """
    Turns a validated generation request into `{files, explanation}`.

    The real provider is tried first (plus `llm_max_retries` extra attempts);
    when it cannot produce a valid answer, or no API key is configured, the
    deterministic mock generator answers instead. `generate` never raises for
    provider problems.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def provider_enabled(self) -> bool:
        return self.settings.has_llm_credentials

    async def generate(self, request: GenerateCodeRequest) -> GenerationOutcome:
        if not self.provider_enabled:
            logger.info("No GOOGLE_API_KEY configured; using mock code generation.")
            return self._fallback(request)

        attempts = 1 + self.settings.llm_max_retries
        attempt = ProviderAttempt(failure="provider was not called")
        for attempt_number in range(1, attempts + 1):
            attempt = await self._call_provider(request)
            if attempt.ok:
                return GenerationOutcome(result=attempt.result, source="provider")
            if attempt_number < attempts:
                logger.info("Code generation attempt %d/%d failed (%s); retrying.", attempt_number, attempts, attempt.failure)

        logger.warning("Code generation provider unavailable, falling back to mock output: %s", attempt.failure)
        return self._fallback(request)

    async def _call_provider(self, request: GenerateCodeRequest) -> ProviderAttempt:
        user_prompt = prompt_library.build_user_prompt(request.prompt, request.language, request.framework)
        try:
            payload = await gemini_service.generate_json(
                user_prompt,
                api_key=self.settings.google_api_key,
                model_name=self.settings.gemini_model,
                system_instruction=prompt_library.CODE_GENERATION_SYSTEM_PROMPT,
                temperature=self.settings.llm_temperature,
                timeout=self.settings.llm_timeout_seconds,
            )
        except ProviderError as e:
            return ProviderAttempt(failure=str(e))

        try:
            return ProviderAttempt(result=CodeGenerationResult.model_validate(payload))
        except ValidationError as e:
            return ProviderAttempt(failure=f"invalid response format: {e.error_count()} validation error(s)")

    @staticmethod
    def _fallback(request: GenerateCodeRequest) -> GenerationOutcome:
        result = generate_mock_code(request.prompt, request.language, request.framework)
        return GenerationOutcome(result=result, source="fallback")
