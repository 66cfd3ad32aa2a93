#!/usr/bin/env python3
"""
Main FastAPI application for the GoldAI digital gold assistant.

Build the app with ``create_app``; every collaborator (ledger, controller,
pricer) can be passed in, otherwise it is built from ``Config``.
"""

from typing import List

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..data.ledger import LedgerStore, create_ledger
from ..data.populate_db import seed_demo_user
from ..nlu.intent_model import IntentModel
from ..schemas.io_models import (
    ChatRequest,
    ChatResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from ..schemas.ledger_models import ChatExchange, GoldQuote, PortfolioSnapshot, Purchase
from ..utils.logger import get_logger
from .config import Config
from .controller import Controller
from .errors import register_exception_handlers
from .generate import GenerationClient
from .portfolio import build_snapshot
from .pricing import GoldPricer
from .prompt_builder import PromptBuilder
from .providers import create_provider
from .purchase import calculate_purchase

logger = get_logger()

router = APIRouter()


def get_ledger(request: Request) -> LedgerStore:
    return request.app.state.ledger


def get_controller(request: Request) -> Controller:
    return request.app.state.controller


def get_pricer(request: Request) -> GoldPricer:
    return request.app.state.pricer


def build_controller(ledger: LedgerStore, pricer: GoldPricer, provider=None, config=Config) -> Controller:
    """Wire the classifier and generator around one completion provider."""
    provider = provider or create_provider(config)
    builder = PromptBuilder(pricer.indicative_price())
    return Controller(
        intent_model=IntentModel(provider, builder),
        generator=GenerationClient(provider, builder),
        ledger=ledger,
    )


@router.post("/api/chat", response_model=ChatResponse)
def chat(body: ChatRequest,
         controller: Controller = Depends(get_controller),
         pricer: GoldPricer = Depends(get_pricer)):
    """Classify the message, reply to it and store the exchange."""
    outcome = controller.handle_message(body.user_id, body.message)
    return ChatResponse(
        response=outcome.response,
        has_investment_intent=outcome.has_investment_intent,
        gold_price=pricer.indicative_price(),
    )


@router.post("/api/purchase", response_model=PurchaseResponse)
def purchase(body: PurchaseRequest,
             ledger: LedgerStore = Depends(get_ledger),
             pricer: GoldPricer = Depends(get_pricer)):
    """Buy gold for ``amountInvested`` at the caller's price or the current quote."""
    price = body.price_per_gram if body.price_per_gram is not None else pricer.current_price()
    breakdown = calculate_purchase(body.amount_invested, price)
    record = ledger.record_purchase(Purchase.from_breakdown(body.user_id, breakdown))
    logger.info("[WORKFLOW] Purchase %s: %s g for %s (user=%s)",
                record.id, record.gold_quantity, record.total_amount, record.user_id)
    return PurchaseResponse(
        success=True,
        purchase=record,
        message="Gold purchase completed successfully!",
    )


@router.get("/api/portfolio/{user_id}", response_model=PortfolioSnapshot)
def portfolio(user_id: str,
              ledger: LedgerStore = Depends(get_ledger),
              pricer: GoldPricer = Depends(get_pricer)):
    return build_snapshot(ledger, user_id, pricer.current_price())


@router.get("/api/gold-price", response_model=GoldQuote)
async def gold_price(pricer: GoldPricer = Depends(get_pricer)):
    return pricer.quote()


@router.get("/api/chat-history/{user_id}", response_model=List[ChatExchange])
def chat_history(user_id: str, ledger: LedgerStore = Depends(get_ledger)):
    return ledger.exchanges_for_user(user_id)


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def create_app(ledger: LedgerStore = None, controller: Controller = None,
               pricer: GoldPricer = None, config=Config) -> FastAPI:
    """Assemble the API around explicit collaborators."""
    if ledger is None or controller is None:
        config.validate()
    pricer = pricer or GoldPricer(config.GOLD_BASE_PRICE, config.PRICE_SPREAD)
    ledger = ledger or create_ledger(config)
    controller = controller or build_controller(ledger, pricer, config=config)
    seed_demo_user(ledger, config)

    app = FastAPI(
        title="GoldAI API",
        description="Chat-driven digital gold investment demo",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # demo front end runs on any origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.ledger = ledger
    app.state.controller = controller
    app.state.pricer = pricer
    register_exception_handlers(app)
    app.include_router(router)

    logger.info("GoldAI API ready: %s", config.describe())
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("goldai.app.main:create_app", factory=True, host="0.0.0.0", port=8000)
