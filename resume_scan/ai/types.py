from typing import Protocol


class JudgmentProvider(Protocol):
    async def generate(
        self,
        prompt: str,
        *,
        document: bytes | None = None,
        mime_type: str | None = None,
    ) -> str: ...
