import asyncio
import logging
from collections.abc import Iterable
from datetime import date

import httpx

from app.exceptions.custom import (
    InvalidDateRangeError,
    MalformedResponseError,
    PriceApiError,
    RateLimitError,
)
from app.mappers.price_response import parse_price_response
from app.schemas.prices import HotelFetchError, PriceFetchReport, PriceObservation

logger = logging.getLogger(__name__)

PRICE_QUERY_PATH = "/hotels/price-query"


def _to_fetch_error(hotel_name: str, exc: BaseException) -> HotelFetchError:
    if isinstance(exc, MalformedResponseError):
        return HotelFetchError(
            hotel_name=hotel_name, kind="malformed", message=exc.message,
            status_code=exc.status_code,
        )
    if isinstance(exc, PriceApiError):
        return HotelFetchError(
            hotel_name=hotel_name, message=exc.message, status_code=exc.status_code,
        )
    if isinstance(exc, RateLimitError):
        return HotelFetchError(hotel_name=hotel_name, message=str(exc), status_code=429)
    return HotelFetchError(
        hotel_name=hotel_name, message=f"{type(exc).__name__}: {exc}",
    )


class PriceQueryService:
    def __init__(self, client: httpx.AsyncClient, base_url: str, token: str = ""):
        self._client = client
        self._url = base_url.rstrip("/") + PRICE_QUERY_PATH
        self._token = token

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Cache-Control": "no-cache",
        }
        token = token or self._token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def fetch_hotel(
        self,
        hotel_name: str,
        start: date,
        end: date,
        token: str | None = None,
    ) -> list[PriceObservation]:
        """Fetch one hotel's observations for [start, end], end inclusive."""
        params = {
            "hotel_names": hotel_name,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "include_end_date": "true",
        }
        logger.info("Price query for '%s': %s ~ %s", hotel_name, start, end)

        resp = await self._client.get(self._url, params=params, headers=self._headers(token))

        if resp.status_code == 429:
            raise RateLimitError("Price API")
        if resp.status_code >= 400:
            raise PriceApiError(resp.text, status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"Non-JSON price response for '{hotel_name}'", status_code=resp.status_code
            ) from exc

        observations = parse_price_response(payload, hotel_name)
        logger.debug("Price query for '%s' returned %d rows", hotel_name, len(observations))
        return observations

    async def fetch_all(
        self,
        hotel_names: Iterable[str],
        start: date,
        end: date,
        token: str | None = None,
    ) -> PriceFetchReport:
        """Fetch every hotel concurrently; one hotel failing never aborts the rest.

        Failed hotels map to an empty list and get an entry in ``errors``.
        """
        if start > end:
            raise InvalidDateRangeError(
                f"start_date {start.isoformat()} is after end_date {end.isoformat()}"
            )

        names = list(dict.fromkeys(n.strip() for n in hotel_names if n and n.strip()))
        report = PriceFetchReport(start_date=start, end_date=end, hotel_names=names)
        if not names:
            return report

        results = await asyncio.gather(
            *(self.fetch_hotel(name, start, end, token=token) for name in names),
            return_exceptions=True,
        )

        for name, res in zip(names, results):
            if isinstance(res, asyncio.CancelledError):
                raise res
            if isinstance(res, BaseException):
                logger.warning("Price fetch failed for '%s': %s", name, res)
                report.observations[name] = []
                report.errors.append(_to_fetch_error(name, res))
            else:
                report.observations[name] = res

        logger.info(
            "Fetched prices for %d hotels (%d failed)",
            len(names), len(report.errors),
        )
        return report
