from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from openai import OpenAI

from pagecraft.config import settings
from pagecraft.observability import get_openai_client_class, start_langfuse_generation

logger = logging.getLogger(__name__)


class LLMClientConfigError(Exception):
    pass


class LLMResponseError(RuntimeError):
    pass


@dataclass
class LLMGenerationParams:
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: float = 0.7
    system_prompt: Optional[str] = None
    trace_name: Optional[str] = None


class LLMClient:
    """Thin wrapper over the OpenAI chat completions API."""

    def __init__(self, default_model: Optional[str] = None) -> None:
        self.default_model = default_model or settings.LLM_DEFAULT_MODEL
        self._openai_client: Optional[OpenAI] = None

    def _client(self) -> OpenAI:
        if self._openai_client is not None:
            return self._openai_client
        if not settings.OPENAI_API_KEY:
            raise LLMClientConfigError("OPENAI_API_KEY not configured")
        client_kwargs: dict[str, Any] = {
            "api_key": settings.OPENAI_API_KEY,
            "timeout": float(settings.LLM_REQUEST_TIMEOUT),
            "max_retries": settings.LLM_REQUEST_RETRIES,
        }
        if settings.OPENAI_BASE_URL:
            client_kwargs["base_url"] = settings.OPENAI_BASE_URL
        client_class = get_openai_client_class()
        self._openai_client = client_class(**client_kwargs)
        return self._openai_client

    def generate_text(self, prompt: str, params: Optional[LLMGenerationParams] = None) -> str:
        params = params or LLMGenerationParams()
        model = params.model or self.default_model
        messages: list[dict[str, str]] = []
        if params.system_prompt:
            messages.append({"role": "system", "content": params.system_prompt})
        messages.append({"role": "user", "content": prompt})

        request: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": params.temperature,
        }
        if params.max_tokens:
            request["max_tokens"] = params.max_tokens

        with start_langfuse_generation(
            name=params.trace_name or "llm.generate_text",
            model=model,
            input=messages,
            model_parameters={"temperature": params.temperature, "max_tokens": params.max_tokens},
        ) as generation:
            response = self._client().chat.completions.create(**request)
            choices = getattr(response, "choices", None) or []
            text = choices[0].message.content if choices else None
            if not text:
                raise LLMResponseError(f"Model {model} returned an empty completion.")
            if generation is not None:
                generation.update(output=text)

        logger.info(
            "LLM completion finished",
            extra={"model": model, "output_chars": len(text)},
        )
        return text
