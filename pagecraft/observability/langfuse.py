from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from langfuse import Langfuse
from openai import OpenAI as OpenAIClient

from pagecraft.config import settings

logger = logging.getLogger(__name__)


class LangfuseConfigError(RuntimeError):
    pass


_client: Langfuse | None = None
_initialized = False


def langfuse_enabled() -> bool:
    return bool(settings.LANGFUSE_ENABLED)


def _environment() -> str:
    return settings.LANGFUSE_ENVIRONMENT or settings.ENVIRONMENT


def _client_kwargs() -> dict[str, Any]:
    if not settings.LANGFUSE_PUBLIC_KEY or not settings.LANGFUSE_SECRET_KEY:
        raise LangfuseConfigError(
            "LANGFUSE_ENABLED is true but LANGFUSE_PUBLIC_KEY/LANGFUSE_SECRET_KEY are not configured."
        )
    sample_rate = float(settings.LANGFUSE_SAMPLE_RATE)
    if not 0.0 <= sample_rate <= 1.0:
        raise LangfuseConfigError("LANGFUSE_SAMPLE_RATE must be between 0.0 and 1.0.")
    kwargs: dict[str, Any] = {
        "public_key": settings.LANGFUSE_PUBLIC_KEY,
        "secret_key": settings.LANGFUSE_SECRET_KEY,
        "tracing_enabled": True,
        "environment": _environment(),
        "release": settings.LANGFUSE_RELEASE,
        "sample_rate": sample_rate,
        "timeout": int(settings.LANGFUSE_TIMEOUT_SECONDS),
        "debug": bool(settings.LANGFUSE_DEBUG),
    }
    if settings.LANGFUSE_BASE_URL:
        kwargs["base_url"] = settings.LANGFUSE_BASE_URL
    else:
        kwargs["host"] = settings.LANGFUSE_HOST
    return kwargs


def initialize_langfuse() -> None:
    global _client
    global _initialized

    if _initialized:
        return

    if not langfuse_enabled():
        if settings.LANGFUSE_REQUIRED:
            raise LangfuseConfigError(
                "LANGFUSE_REQUIRED is true but LANGFUSE_ENABLED is false. "
                "Enable Langfuse and configure its credentials."
            )
        _initialized = True
        logger.info("Langfuse tracing disabled", extra={"environment": _environment()})
        return

    client = Langfuse(**_client_kwargs())
    if settings.LANGFUSE_AUTH_CHECK:
        try:
            ok = bool(client.auth_check())
        except Exception as exc:  # noqa: BLE001
            raise LangfuseConfigError("Langfuse auth check failed during initialization.") from exc
        if not ok:
            raise LangfuseConfigError("Langfuse auth check returned false. Verify the project API keys.")

    _client = client
    _initialized = True
    logger.info(
        "Langfuse initialized",
        extra={"environment": _environment(), "sample_rate": settings.LANGFUSE_SAMPLE_RATE},
    )


def get_langfuse_client() -> Langfuse | None:
    initialize_langfuse()
    if not langfuse_enabled():
        return None
    if _client is None:
        raise LangfuseConfigError("Langfuse client is not initialized.")
    return _client


def shutdown_langfuse() -> None:
    if not _initialized or _client is None:
        return
    _client.shutdown()


def get_openai_client_class() -> type[OpenAIClient]:
    if langfuse_enabled():
        initialize_langfuse()
        from langfuse.openai import OpenAI as LangfuseOpenAI

        return LangfuseOpenAI
    return OpenAIClient


@contextmanager
def start_langfuse_generation(
    *,
    name: str,
    model: str,
    input: Any | None = None,
    metadata: dict[str, Any] | None = None,
    model_parameters: dict[str, Any] | None = None,
) -> Iterator[Any | None]:
    client = get_langfuse_client()
    if client is None:
        yield None
        return

    with client.start_as_current_generation(
        name=name,
        input=input,
        model=model,
        metadata=metadata,
        model_parameters=model_parameters,
    ) as generation:
        try:
            yield generation
        except Exception as exc:  # noqa: BLE001
            generation.update(level="ERROR", status_message=str(exc))
            raise
