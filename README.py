"""
GoldAI — System Documentation
=============================

This module-style README documents the architecture, components and
operational practices of the GoldAI digital gold demo. It can be imported
to surface sections programmatically or run to print an outline.

How to use this file
--------------------
- View in an editor for structured reading.
- Run `python README.py` to print the outline.

Table of Contents
-----------------
1. System Overview
2. Architecture
3. Backend Components
4. Data & Persistence
5. Conversation Flow
6. Purchase Flow
7. Configuration & Environment
8. Testing Strategy
9. Errors & Logging
10. Running Locally

"""

from __future__ import annotations

import textwrap


def section(title: str, body: str) -> str:
    return f"\n{title}\n{'-' * len(title)}\n{body.strip()}\n"


SYSTEM_OVERVIEW = section(
    "1. System Overview",
    """
    GoldAI is a chat-driven digital gold investment demo. A user talks to an
    assistant about gold; the backend detects purchase intent with a language
    model, replies, and records simulated purchases and a portfolio per user.
    Prices are simulated around a fixed base; nothing touches a real market.
    """,
)


ARCHITECTURE = section(
    "2. Architecture",
    """
    - Backend: FastAPI app built by `goldai.app.main.create_app`.
    - LLM: one completion provider (hosted OpenAI-compatible API or a local
      Ollama model) chosen at startup and shared by classifier and generator.
    - Ledger: one backend per deployment (memory, SQL via SQLAlchemy, Redis).
    """,
)


BACKEND_COMPONENTS = section(
    "3. Backend Components",
    """
    - `app/pricing.py`: GoldPricer, jittered quotes around the base price.
    - `app/purchase.py`: calculate_purchase, grams + 3% platform fee.
    - `nlu/intent_model.py`: IntentModel, YES/NO purchase intent.
    - `app/generate.py`: GenerationClient, replies + call-to-action.
    - `app/controller.py`: Controller, one chat turn end to end.
    - `app/portfolio.py`: build_snapshot, derived holdings and gains.
    - `data/ledger.py`: LedgerStore interface, MemoryLedger, create_ledger.
    """,
)


DATA_AND_PERSISTENCE = section(
    "4. Data & Persistence",
    """
    - Records: User, Purchase, ChatExchange (frozen pydantic models).
    - Money is Decimal: amounts at 2 dp, gold quantity at 6 dp.
    - Append-only: no updates, no deletes. Lookup by user id only.
    - SQL tables: users, purchases, chat_messages (`data/models.py`).
    - Redis keys: goldai:users, goldai:purchases:<user>, goldai:chat:<user>.
    """,
)


CONVERSATION_FLOW = section(
    "5. Conversation Flow",
    """
    POST /api/chat -> classify intent -> generate reply -> store exchange.
    If either model call fails, nothing is stored and the client gets a 500
    with a short message. History replays oldest first.
    """,
)


PURCHASE_FLOW = section(
    "6. Purchase Flow",
    """
    POST /api/purchase -> price (caller's or current quote) -> calculate ->
    store. Amounts under ₹10 are rejected with 400. GET /api/portfolio/<id>
    recomputes holdings on every call and lists the last five purchases.
    """,
)


CONFIG_ENV = section(
    "7. Configuration & Environment",
    """
    - LLM_PROVIDER (openai|ollama), OPENAI_API_KEY, OPENAI_MODEL, OLLAMA_BASE_URL, OLLAMA_MODEL
    - LLM_TEMPERATURE, LLM_TIMEOUT
    - LEDGER_BACKEND (memory|sql|redis), DATABASE_URL, REDIS_HOST/PORT/DB
    - GOLD_BASE_PRICE, LOG_LEVEL
    Values may also come from a `.env` file.
    """,
)


TESTING = section(
    "8. Testing Strategy",
    """
    - `python -m pytest tests -v`
    - LLM calls use stub providers; HTTP goes through FastAPI's TestClient.
    - Every ledger backend runs the same contract suite (sqlite in memory,
      a fake Redis client).
    """,
)


ERRORS_AND_LOGGING = section(
    "9. Errors & Logging",
    """
    - Exceptions derive from GoldAIError and render as {"error", "code"}.
    - Logs go to the `goldai` logger; user messages are masked before logging.
    """,
)


RUNNING = section(
    "10. Running Locally",
    """
    - `pip install -e .[test]`
    - `python -m goldai.app.main` (serves on :8000)
    """,
)


def as_text() -> str:
    return "\n".join(
        [
            SYSTEM_OVERVIEW,
            ARCHITECTURE,
            BACKEND_COMPONENTS,
            DATA_AND_PERSISTENCE,
            CONVERSATION_FLOW,
            PURCHASE_FLOW,
            CONFIG_ENV,
            TESTING,
            ERRORS_AND_LOGGING,
            RUNNING,
        ]
    )


def main() -> None:
    print(textwrap.dedent(as_text()))


if __name__ == "__main__":
    main()
