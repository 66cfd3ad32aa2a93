"""LLM-based purchase-intent classifier.

The model is asked for a bare YES/NO. Anything that does not contain YES,
including empty or rambling output, counts as no intent.
"""
from ..app.errors import ClassificationFailure
from ..app.prompt_builder import PromptBuilder
from ..app.providers import CompletionError, CompletionProvider
from ..utils.logger import get_logger

logger = get_logger()


def parse_intent(raw: str) -> bool:
    return "YES" in (raw or "").strip().upper()


class IntentModel:
    def __init__(self, provider: CompletionProvider, builder: PromptBuilder):
        self.provider = provider
        self.builder = builder

    def predict(self, message: str) -> bool:
        prompt = self.builder.build_intent_prompt(message)
        try:
            raw = self.provider.complete(prompt)
        except CompletionError as e:
            raise ClassificationFailure() from e
        has_intent = parse_intent(raw)
        logger.debug("[WORKFLOW] intent raw=%r -> %s", (raw or "")[:20], has_intent)
        return has_intent
