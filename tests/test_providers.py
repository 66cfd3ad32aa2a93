"""Completion provider tests (HTTP calls patched out)."""

import unittest
from unittest.mock import MagicMock, patch

import requests

from goldai.app.providers import (
    CompletionError,
    OllamaProvider,
    OpenAIProvider,
    create_provider,
)


def fake_response(payload=None, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status} error", response=response
        )
    return response


class TestOpenAIProvider(unittest.TestCase):

    def setUp(self):
        self.provider = OpenAIProvider(api_key="sk-test", model="gpt-3.5-turbo", timeout=5)

    @patch("goldai.app.providers.requests.post")
    def test_sends_chat_completion_request(self, mock_post):
        mock_post.return_value = fake_response({"choices": [{"message": {"content": "YES"}}]})

        self.assertEqual(self.provider.complete("Is this intent?"), "YES")

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://api.openai.com/v1/chat/completions")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer sk-test")
        self.assertEqual(kwargs["json"]["model"], "gpt-3.5-turbo")
        self.assertEqual(kwargs["json"]["messages"], [{"role": "user", "content": "Is this intent?"}])
        self.assertEqual(kwargs["json"]["temperature"], 0.7)
        self.assertEqual(kwargs["timeout"], 5)

    @patch("goldai.app.providers.requests.post")
    def test_http_error_raises_completion_error(self, mock_post):
        mock_post.return_value = fake_response(status=503)
        with self.assertRaises(CompletionError):
            self.provider.complete("hi")

    @patch("goldai.app.providers.requests.post")
    def test_timeout_raises_completion_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout("read timed out")
        with self.assertRaises(CompletionError):
            self.provider.complete("hi")

    @patch("goldai.app.providers.requests.post")
    def test_unexpected_body_raises_completion_error(self, mock_post):
        mock_post.return_value = fake_response({"error": "nope"})
        with self.assertRaises(CompletionError):
            self.provider.complete("hi")

    def test_api_key_is_required(self):
        with self.assertRaises(ValueError):
            OpenAIProvider(api_key="")


class TestOllamaProvider(unittest.TestCase):

    @patch("goldai.app.providers.requests.post")
    def test_sends_generate_request(self, mock_post):
        mock_post.return_value = fake_response({"response": "Gold is a store of value.", "done": True})
        provider = OllamaProvider(base_url="http://ollama:11434/", model="llama3.2:3b")

        self.assertEqual(provider.complete("Tell me about gold"), "Gold is a store of value.")

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "http://ollama:11434/api/generate")
        self.assertEqual(kwargs["json"]["prompt"], "Tell me about gold")
        self.assertFalse(kwargs["json"]["stream"])
        self.assertEqual(kwargs["json"]["options"], {"temperature": 0.7})

    @patch("goldai.app.providers.requests.post")
    def test_connection_error_raises_completion_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(CompletionError):
            OllamaProvider().complete("hi")


class TestCreateProvider(unittest.TestCase):

    def config(self, **overrides):
        base = {
            "LLM_PROVIDER": "ollama",
            "OPENAI_API_KEY": None,
            "OPENAI_MODEL": "gpt-4o-mini",
            "OPENAI_BASE_URL": "https://api.openai.com/v1",
            "OLLAMA_BASE_URL": "http://localhost:11434",
            "OLLAMA_MODEL": "llama3.2:3b",
            "LLM_TEMPERATURE": 0.2,
            "LLM_TIMEOUT": 30,
        }
        base.update(overrides)
        return type("TestConfig", (), base)

    def test_local_model(self):
        provider = create_provider(self.config())
        self.assertIsInstance(provider, OllamaProvider)
        self.assertEqual(provider.temperature, 0.2)
        self.assertEqual(provider.timeout, 30)

    def test_hosted_api(self):
        provider = create_provider(self.config(LLM_PROVIDER="openai", OPENAI_API_KEY="sk-test"))
        self.assertIsInstance(provider, OpenAIProvider)
        self.assertEqual(provider.model, "gpt-4o-mini")

    def test_unknown_provider(self):
        with self.assertRaises(ValueError):
            create_provider(self.config(LLM_PROVIDER="bard"))


if __name__ == "__main__":
    unittest.main()
