"""Controller / orchestrator for a single chat turn.

Intent classification runs first because the reply prompt depends on its
result. The exchange is written to the ledger only after both model calls
have succeeded, so a failed turn leaves nothing behind.
"""
from typing import NamedTuple

from ..nlu.intent_model import IntentModel
from ..schemas.ledger_models import ChatExchange, make_record
from ..utils.logger import get_logger
from ..utils.security import preview
from .errors import BadRequestError
from .generate import GenerationClient

logger = get_logger()


class ChatOutcome(NamedTuple):
    response: str
    has_investment_intent: bool
    exchange: ChatExchange


class Controller:
    def __init__(self, intent_model: IntentModel, generator: GenerationClient, ledger):
        self.intent_model = intent_model
        self.generator = generator
        self.ledger = ledger

    def handle_message(self, user_id: str, message: str) -> ChatOutcome:
        if not message or not message.strip():
            raise BadRequestError("Message is required")

        logger.info("[WORKFLOW] 1. Chat turn for %s: '%s'", user_id, preview(message))

        has_intent = self.intent_model.predict(message)
        logger.info("[WORKFLOW] 2. Investment intent: %s", has_intent)

        response = self.generator.generate_answer(message, has_intent)
        logger.info("[WORKFLOW] 3. Reply generated (%d chars)", len(response))

        exchange = self.ledger.record_exchange(make_record(
            ChatExchange,
            user_id=user_id,
            message=message,
            response=response,
            is_investment_intent=has_intent,
        ))
        logger.info("[WORKFLOW] 4. Exchange %s stored", exchange.id)

        return ChatOutcome(response, has_intent, exchange)
