import logging
from dataclasses import dataclass
from typing import Any

import httpx
import openai

from note_gen.config import GenerationConfig
from note_gen.errors import (
    InternalError,
    NoteGenerationError,
    UpstreamResponseShapeError,
    UpstreamTransportError,
)
from note_gen.text import clip_text

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000
NOT_CONFIGURED_MESSAGE = "Generation service is not configured"
EMPTY_PROMPT_MESSAGE = "Prompt must not be empty"


@dataclass(frozen=True)
class GenerationSuccess:
    content: str

    @property
    def ok(self) -> bool:
        return True

    def as_payload(self) -> dict:
        return {"success": True, "content": self.content}


@dataclass(frozen=True)
class GenerationFailure:
    message: str

    @property
    def ok(self) -> bool:
        return False

    def as_payload(self) -> dict:
        return {"success": False, "error": self.message}


GenerationResult = GenerationSuccess | GenerationFailure


class GenerationClient:
    """Single-turn text generation against an OpenAI-compatible chat endpoint.

    Every outcome is returned as a ``GenerationResult``; upstream errors are
    logged in full and replaced by a fixed message before leaving this class.
    """

    def __init__(self, config: GenerationConfig) -> None:
        self.config = config
        self._llm: Any | None = None
        if not config.api_key:
            logger.warning("llm.config missing_api_key=true model=%s generation disabled", config.model)

    async def generate(self, prompt: str) -> GenerationResult:
        if not prompt or not prompt.strip():
            logger.warning("llm.skip reason=empty_prompt")
            return GenerationFailure(EMPTY_PROMPT_MESSAGE)
        if not self.config.api_key:
            logger.error("llm.skip reason=missing_api_key model=%s", self.config.model)
            return GenerationFailure(NOT_CONFIGURED_MESSAGE)

        logger.info(
            "llm.call model=%s max_tokens=%d timeout=%.1fs retries=%d prompt_chars=%d",
            self.config.model,
            self.config.max_output_tokens,
            self.config.timeout_seconds,
            self.config.max_retries,
            len(prompt),
        )
        try:
            response = await self._get_llm().ainvoke(prompt)
            content = self._first_text_segment(getattr(response, "content", None))
        except Exception as exc:
            error = self._normalize_error(exc)
            logger.error(
                "llm.error model=%s category=%s type=%s detail=%s",
                self.config.model,
                error.__class__.__name__,
                exc.__class__.__name__,
                self._extract_error_detail(exc),
            )
            return GenerationFailure(error.public_message)

        logger.info("llm.response model=%s chars=%d", self.config.model, len(content))
        return GenerationSuccess(content)

    def _get_llm(self):
        if self._llm is None:
            from langchain_openai import ChatOpenAI

            self._llm = ChatOpenAI(
                model=self.config.model,
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                max_tokens=self.config.max_output_tokens,
                timeout=self.config.timeout_seconds,
                max_retries=self.config.max_retries,
            )
        return self._llm

    @staticmethod
    def _first_text_segment(content: Any) -> str:
        if isinstance(content, str):
            if content.strip():
                return content
            raise UpstreamResponseShapeError("response content is empty")
        if isinstance(content, list):
            for item in content:
                if isinstance(item, str) and item.strip():
                    return item
                if isinstance(item, dict) and item.get("type", "text") == "text":
                    text = item.get("text")
                    if isinstance(text, str) and text.strip():
                        return text
            raise UpstreamResponseShapeError(f"no text segment in {len(content)} content parts")
        raise UpstreamResponseShapeError(f"unexpected content type {type(content).__name__}")

    @staticmethod
    def _normalize_error(exc: Exception) -> NoteGenerationError:
        detail = str(exc)
        if isinstance(exc, NoteGenerationError):
            return exc
        if isinstance(exc, (openai.APITimeoutError, httpx.TimeoutException, TimeoutError)):
            return UpstreamTransportError(detail, public_message="Upstream generation request timed out")
        if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
            return UpstreamTransportError(
                detail,
                public_message="Upstream generation service rejected the configured credentials",
            )
        if isinstance(exc, openai.RateLimitError):
            return UpstreamTransportError(
                detail,
                public_message="Upstream generation service is rate limiting requests",
            )
        if isinstance(exc, (openai.APIError, httpx.HTTPError)):
            return UpstreamTransportError(detail)
        return InternalError(detail)

    def _extract_error_detail(self, exc: Exception) -> str:
        status_code = getattr(exc, "status_code", None)
        message = getattr(exc, "message", None) or str(exc)
        body = getattr(exc, "body", None)
        details = [f"status_code={status_code}" if status_code is not None else ""]
        if body is not None:
            details.append(f"body={body}")
        details.append(f"message={message}")
        text = " ".join([part for part in details if part]).strip()
        if self.config.api_key:
            text = text.replace(self.config.api_key, "***")
        return clip_text(text, ERROR_LOG_LIMIT)
