"""Application exceptions and the FastAPI handlers that render them."""

from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..utils.logger import get_logger

logger = get_logger()


class GoldAIError(Exception):
    """Base application exception with a short, client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.message, "code": self.error_code}


class BadRequestError(GoldAIError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BAD_REQUEST"
    message = "Bad request"


class InvalidAmount(BadRequestError):
    """Investment amount missing, non-numeric or below the minimum."""

    error_code = "INVALID_AMOUNT"
    message = "Minimum investment amount is ₹10"


class ClassificationFailure(GoldAIError):
    error_code = "CLASSIFICATION_FAILED"
    message = "Failed to process message"


class GenerationFailure(GoldAIError):
    error_code = "GENERATION_FAILED"
    message = "Failed to process message"


class StorageUnavailable(GoldAIError):
    error_code = "STORAGE_UNAVAILABLE"
    message = "Storage temporarily unavailable"


class ValidationError(GoldAIError):
    """A record failed schema validation before it reached the ledger."""

    error_code = "VALIDATION_ERROR"
    message = "Invalid record"


def _request_error(request: Request, exc: RequestValidationError) -> BadRequestError:
    # the chat endpoint's only required input is the message
    if request.url.path == "/api/chat":
        for err in exc.errors():
            loc = tuple(err.get("loc", ()))
            if loc == ("body",) or loc[-1:] == ("message",):
                return BadRequestError("Message is required")
    return BadRequestError("Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = _request_error(request, exc)
        logger.info("%s %s rejected: %s", request.method, request.url.path, error.message)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(GoldAIError)
    async def goldai_error_handler(request: Request, exc: GoldAIError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.error_code, exc_info=exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=GoldAIError().to_dict(),
        )
