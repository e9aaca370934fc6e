from __future__ import annotations

import logging
import os
import time
from typing import Any, Optional

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError

from resume_scan.assessment.errors import ProviderUnavailable

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Judgment provider backed by Google Generative AI (Gemini)."""

    def __init__(
        self,
        model: str = "gemini-2.0-flash-lite",
        api_key: Optional[str] = None,
        temperature: float = 0.3,
        max_output_tokens: int = 8000,
    ):
        key = (api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or "").strip()
        if not key:
            raise ProviderUnavailable("GEMINI_API_KEY/GOOGLE_API_KEY is missing")

        self._model_name = os.getenv("GEMINI_MODEL") or model
        genai.configure(api_key=key)
        self._model = genai.GenerativeModel(self._model_name)
        self._generation_config = genai.GenerationConfig(
            temperature=temperature,
            top_p=0.8,
            top_k=40,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json",
        )

    async def generate(
        self,
        prompt: str,
        *,
        document: bytes | None = None,
        mime_type: str | None = None,
    ) -> str:
        parts: list[Any] = [prompt]
        if document:
            parts.append({"mime_type": mime_type or "application/pdf", "data": document})

        started = time.perf_counter()
        logger.debug("gemini_generate_start model=%s prompt=%s", self._model_name, prompt[:200])
        try:
            response = await self._model.generate_content_async(parts, generation_config=self._generation_config)
        except GoogleAPIError as exc:
            logger.warning("gemini_generate_failed model=%s prompt_len=%s: %s", self._model_name, len(prompt), exc)
            raise ProviderUnavailable(f"Gemini request failed: {exc}") from exc

        try:
            text = response.text
        except ValueError as exc:
            # Raised when the candidate was blocked and carries no text parts.
            raise ProviderUnavailable(f"Gemini returned no text: {exc}", code="provider_empty") from exc

        logger.info(
            "gemini_generate_done model=%s latency_ms=%s output_len=%s",
            self._model_name,
            int((time.perf_counter() - started) * 1000),
            len(text or ""),
        )
        if not text:
            raise ProviderUnavailable("Gemini returned an empty response.", code="provider_empty")
        return text
