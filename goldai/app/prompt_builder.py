#!/usr/bin/env python3
"""
Prompt builder module for the GoldAI assistant.

Holds the two fixed templates (intent analysis and reply) and the
call-to-action appended to replies when purchase intent is detected.
"""

INTENT_TEMPLATE = """Analyze the following user message about gold investment and determine if they are expressing investment intent.

User message: "{message}"

Respond with only "YES" if they want to buy/invest in gold, or "NO" otherwise."""

RESPONSE_TEMPLATE = """You are GoldAI, an intelligent digital gold investment assistant.
Current gold price: ₹{price} per gram

User message: "{message}"
Investment intent detected: {has_intent}

Guidelines:
- If intent detected → encourage buying
- Otherwise → give educational/helpful response"""

CALL_TO_ACTION = "\n\n💡 Would you like to purchase digital gold now? Current price: ₹{price}/gram"


def format_price(price: int) -> str:
    return f"{price:,}"


class PromptBuilder:
    """Renders the GoldAI prompts."""

    def __init__(self, indicative_price: int):
        self.indicative_price = indicative_price

    def build_intent_prompt(self, message: str) -> str:
        return INTENT_TEMPLATE.format(message=message)

    def build_response_prompt(self, message: str, has_intent: bool) -> str:
        return RESPONSE_TEMPLATE.format(
            message=message,
            has_intent="YES" if has_intent else "NO",
            price=format_price(self.indicative_price),
        )

    def call_to_action(self) -> str:
        return CALL_TO_ACTION.format(price=format_price(self.indicative_price))
