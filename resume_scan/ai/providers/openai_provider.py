from __future__ import annotations

import base64
import logging
import os
import time
from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from resume_scan.assessment.errors import ProviderUnavailable

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 2,
        temperature: float = 0.3,
        max_output_tokens: int = 8000,
    ):
        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise ProviderUnavailable("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=float(os.getenv("OPENAI_TIMEOUT_S", str(timeout_s))),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", str(max_retries))),
        )

    @staticmethod
    def _document_part(document: bytes, mime_type: str) -> dict[str, Any]:
        encoded = base64.b64encode(document).decode("utf-8")
        data_url = f"data:{mime_type};base64,{encoded}"
        if mime_type.startswith("image/"):
            return {"type": "image_url", "image_url": {"url": data_url}}
        return {"type": "file", "file": {"filename": "resume.pdf", "file_data": data_url}}

    async def generate(
        self,
        prompt: str,
        *,
        document: bytes | None = None,
        mime_type: str | None = None,
    ) -> str:
        content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
        if document:
            content.append(self._document_part(document, mime_type or "application/pdf"))

        started = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": content}],
                temperature=self._temperature,
                max_tokens=self._max_output_tokens,
            )
        except OpenAIError as exc:
            logger.warning("openai_generate_failed model=%s prompt_len=%s: %s", self._model, len(prompt), exc)
            raise ProviderUnavailable(f"OpenAI request failed: {exc}") from exc

        text = response.choices[0].message.content if response.choices else ""
        logger.info(
            "openai_generate_done model=%s latency_ms=%s output_len=%s",
            self._model,
            int((time.perf_counter() - started) * 1000),
            len(text or ""),
        )
        if not text:
            raise ProviderUnavailable("OpenAI returned an empty response.", code="provider_empty")
        return text
