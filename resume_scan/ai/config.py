import os
from dataclasses import dataclass

_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.0-flash-lite",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    temperature: float
    max_output_tokens: int


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "openai").strip().lower()
    model = (os.getenv("AI_MODEL") or _DEFAULT_MODELS.get(provider, "")).strip()
    temperature = float(os.getenv("AI_TEMPERATURE", "0.3"))
    max_output_tokens = int(os.getenv("AI_MAX_OUTPUT_TOKENS", "8000"))
    return AIConfig(
        provider=provider,
        model=model,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
    )
