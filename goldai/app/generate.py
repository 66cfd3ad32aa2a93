#!/usr/bin/env python3
"""
Generation module for the GoldAI assistant.

Produces the assistant's reply with the configured completion provider,
conditioned on whether the message carried purchase intent.
"""

from ..utils.logger import get_logger
from .errors import GenerationFailure
from .prompt_builder import PromptBuilder
from .providers import CompletionError, CompletionProvider

logger = get_logger()


class GenerationClient:
    """Writes replies; adds the purchase nudge when intent was detected."""

    def __init__(self, provider: CompletionProvider, builder: PromptBuilder):
        self.provider = provider
        self.builder = builder

    def generate_answer(self, message: str, has_intent: bool) -> str:
        """
        Generate a reply to ``message``.

        Args:
            message: The user's original message
            has_intent: Result of intent classification for the message

        Returns:
            Model output, followed by the call-to-action when ``has_intent``

        Raises:
            GenerationFailure: If the provider call fails
        """
        prompt = self.builder.build_response_prompt(message, has_intent)
        try:
            answer = self.provider.complete(prompt)
        except CompletionError as e:
            raise GenerationFailure() from e
        logger.debug("[WORKFLOW] generated answer length=%d", len(answer))

        if has_intent:
            return answer + self.builder.call_to_action()
        return answer
