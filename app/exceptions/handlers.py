import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import InvalidDateRangeError, MalformedResponseError, PriceApiError, RateLimitError

logger = logging.getLogger(__name__)


async def price_api_error_handler(_request: Request, exc: PriceApiError) -> JSONResponse:
    logger.error("Price API error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Price API error: {exc.message}"},
    )


async def malformed_response_error_handler(
    _request: Request, exc: MalformedResponseError
) -> JSONResponse:
    logger.error("Malformed price response: %s", exc.message)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Malformed price response: {exc.message}"},
    )


async def invalid_date_range_error_handler(
    _request: Request, exc: InvalidDateRangeError
) -> JSONResponse:
    logger.info("Rejected date range: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded for {exc.service}"},
    )
