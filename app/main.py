import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import (
    InvalidDateRangeError,
    MalformedResponseError,
    PriceApiError,
    RateLimitError,
)
from app.exceptions.handlers import (
    invalid_date_range_error_handler,
    malformed_response_error_handler,
    price_api_error_handler,
    rate_limit_error_handler,
)
from app.routers.prices import router as prices_router
from app.schemas.responses import HealthResponse
from app.services.dashboard import DashboardService
from app.services.price_query import PriceQueryService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        price_query = PriceQueryService(
            client, settings.price_api_base_url, token=settings.price_api_token
        )
        app.state.dashboard_service = DashboardService(
            price_query, label_locale=settings.label_locale
        )

        yield


app = FastAPI(title="Hotel Price Pivot", lifespan=lifespan)

app.add_exception_handler(PriceApiError, price_api_error_handler)
app.add_exception_handler(MalformedResponseError, malformed_response_error_handler)
app.add_exception_handler(InvalidDateRangeError, invalid_date_range_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(prices_router)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")
