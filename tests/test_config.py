"""Configuration validation tests."""

import unittest

from goldai.app.config import Config
from goldai.utils.security import mask_pii, preview


def config(**overrides):
    return type("TestConfig", (Config,), overrides)


class TestConfigValidate(unittest.TestCase):

    def test_local_model_needs_no_key(self):
        self.assertTrue(config(LLM_PROVIDER="ollama", OPENAI_API_KEY=None, LEDGER_BACKEND="memory").validate())

    def test_hosted_api_needs_a_key(self):
        with self.assertRaisesRegex(ValueError, "OPENAI_API_KEY"):
            config(LLM_PROVIDER="openai", OPENAI_API_KEY=None, LEDGER_BACKEND="memory").validate()

    def test_unknown_names_are_reported_together(self):
        with self.assertRaises(ValueError) as ctx:
            config(LLM_PROVIDER="bard", LEDGER_BACKEND="mongo").validate()
        self.assertIn("LLM_PROVIDER", str(ctx.exception))
        self.assertIn("LEDGER_BACKEND", str(ctx.exception))

    def test_describe_hides_the_key(self):
        described = config(LLM_PROVIDER="openai", OPENAI_API_KEY="sk-secret").describe()
        self.assertNotIn("sk-secret", str(described))
        self.assertTrue(described["api_key_set"])


class TestMasking(unittest.TestCase):

    def test_long_digit_runs_are_redacted(self):
        self.assertEqual(mask_pii("card 4111111111111111 please"), "card [REDACTED] please")
        self.assertEqual(mask_pii("buy 500 rupees"), "buy 500 rupees")

    def test_preview_is_single_line_and_bounded(self):
        text = preview("line one\nline two " + "x" * 200, limit=20)
        self.assertNotIn("\n", text)
        self.assertTrue(text.endswith("..."))
        self.assertEqual(len(text), 23)


if __name__ == "__main__":
    unittest.main()
