import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from google.api_core.exceptions import GoogleAPIError  # noqa: E402

from resume_scan.ai import get_judgment_provider  # noqa: E402
from resume_scan.ai.config import load_ai_config  # noqa: E402
from resume_scan.ai.providers.gemini_provider import GeminiProvider  # noqa: E402
from resume_scan.ai.providers.openai_provider import OpenAIProvider  # noqa: E402
from resume_scan.assessment import ProviderUnavailable  # noqa: E402


def _completion(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


class ProviderFactoryTests(unittest.TestCase):
    def test_ai_config_defaults_per_provider(self):
        with patch.dict(os.environ, {"AI_PROVIDER": "Gemini", "AI_MODEL": ""}):
            cfg = load_ai_config()
        self.assertEqual(cfg.provider, "gemini")
        self.assertEqual(cfg.model, "gemini-2.0-flash-lite")
        self.assertEqual(cfg.temperature, 0.3)

    def test_unsupported_provider(self):
        with patch.dict(os.environ, {"AI_PROVIDER": "cohere"}):
            with self.assertRaises(ValueError):
                get_judgment_provider()

    def test_missing_api_key(self):
        with patch.dict(os.environ, {"AI_PROVIDER": "openai", "OPENAI_API_KEY": ""}):
            with self.assertRaises(ProviderUnavailable) as ctx:
                get_judgment_provider()
        self.assertEqual(ctx.exception.code, "provider_unavailable")

    def test_openai_provider_selected(self):
        with patch.dict(os.environ, {"AI_PROVIDER": "openai", "OPENAI_API_KEY": "sk-test", "AI_MODEL": "gpt-test"}):
            provider = get_judgment_provider()
        self.assertIsInstance(provider, OpenAIProvider)


class OpenAIProviderTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.provider = OpenAIProvider(model="gpt-test", api_key="sk-test")
        self.create = AsyncMock(return_value=_completion('[{"id": "emailPresent"}]'))
        self.provider._client = MagicMock()
        self.provider._client.chat.completions.create = self.create

    async def test_generate_returns_text(self):
        text = await self.provider.generate("Analyze this resume")
        self.assertEqual(text, '[{"id": "emailPresent"}]')
        kwargs = self.create.await_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-test")
        self.assertEqual(kwargs["messages"][0]["content"], [{"type": "text", "text": "Analyze this resume"}])

    async def test_document_is_attached_as_file(self):
        await self.provider.generate("Analyze", document=b"%PDF", mime_type="application/pdf")
        parts = self.create.await_args.kwargs["messages"][0]["content"]
        self.assertEqual(parts[1]["type"], "file")
        self.assertTrue(parts[1]["file"]["file_data"].startswith("data:application/pdf;base64,"))

    async def test_empty_response(self):
        self.create.return_value = _completion("")
        with self.assertRaises(ProviderUnavailable) as ctx:
            await self.provider.generate("Analyze")
        self.assertEqual(ctx.exception.code, "provider_empty")


class _BlockedResponse:
    @property
    def text(self):
        raise ValueError("The candidate has no text parts (finish_reason SAFETY).")


class GeminiProviderTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.model = MagicMock()
        self.generate = AsyncMock(return_value=SimpleNamespace(text='[{"id": "actionVerbs"}]'))
        self.model.generate_content_async = self.generate
        with patch.dict(os.environ, {"GEMINI_MODEL": ""}), patch(
            "resume_scan.ai.providers.gemini_provider.genai"
        ) as genai:
            genai.GenerativeModel.return_value = self.model
            self.provider = GeminiProvider(model="gemini-test", api_key="g-test")
        self.genai = genai

    def test_client_configuration(self):
        self.genai.configure.assert_called_once_with(api_key="g-test")
        self.genai.GenerativeModel.assert_called_once_with("gemini-test")
        config_kwargs = self.genai.GenerationConfig.call_args.kwargs
        self.assertEqual(config_kwargs["response_mime_type"], "application/json")

    def test_missing_api_key(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "", "GOOGLE_API_KEY": ""}):
            with self.assertRaises(ProviderUnavailable):
                GeminiProvider(model="gemini-test")

    async def test_generate_returns_text(self):
        text = await self.provider.generate("Analyze this resume")
        self.assertEqual(text, '[{"id": "actionVerbs"}]')
        parts = self.generate.await_args.args[0]
        self.assertEqual(parts, ["Analyze this resume"])

    async def test_document_is_sent_inline(self):
        await self.provider.generate("Analyze", document=b"%PDF", mime_type="application/pdf")
        parts = self.generate.await_args.args[0]
        self.assertEqual(parts[1], {"mime_type": "application/pdf", "data": b"%PDF"})

    async def test_api_error(self):
        self.generate.side_effect = GoogleAPIError("quota exceeded")
        with self.assertRaises(ProviderUnavailable) as ctx:
            await self.provider.generate("Analyze")
        self.assertEqual(ctx.exception.code, "provider_unavailable")

    async def test_blocked_candidate(self):
        self.generate.return_value = _BlockedResponse()
        with self.assertRaises(ProviderUnavailable) as ctx:
            await self.provider.generate("Analyze")
        self.assertEqual(ctx.exception.code, "provider_empty")

    async def test_empty_text(self):
        self.generate.return_value = SimpleNamespace(text="")
        with self.assertRaises(ProviderUnavailable) as ctx:
            await self.provider.generate("Analyze")
        self.assertEqual(ctx.exception.code, "provider_empty")


if __name__ == "__main__":
    unittest.main()
