from typing import Any

from pydantic import ValidationError

from app.exceptions.custom import MalformedResponseError
from app.schemas.prices import (
    BarePriceResponse,
    DataPriceResponse,
    PriceObservation,
    ResponseShape,
)


def detect_response_shape(payload: Any, hotel_name: str) -> ResponseShape:
    """Classify a price-query payload into one of the accepted shapes.

    Order matters: a map keyed by the requested hotel wins over a ``data``
    array, and an object whose values are all lists is a keyed map that
    simply has no entry for this hotel (``{}`` included).
    """
    if isinstance(payload, list):
        return ResponseShape.bare
    if isinstance(payload, dict):
        if isinstance(payload.get(hotel_name), list):
            return ResponseShape.keyed
        if isinstance(payload.get("data"), list):
            return ResponseShape.data
        if all(isinstance(value, list) for value in payload.values()):
            return ResponseShape.keyed
    raise MalformedResponseError(
        f"Unrecognized price response for '{hotel_name}': {type(payload).__name__}"
    )


def parse_price_response(payload: Any, hotel_name: str) -> list[PriceObservation]:
    """Normalize any accepted payload shape into a list of observations."""
    shape = detect_response_shape(payload, hotel_name)
    try:
        if shape is ResponseShape.keyed:
            # Sibling keys belong to other hotels or metadata; only this slot is read
            return BarePriceResponse.model_validate(payload.get(hotel_name, [])).root
        if shape is ResponseShape.data:
            return DataPriceResponse.model_validate(payload).data
        return BarePriceResponse.model_validate(payload).root
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Invalid {shape} price response for '{hotel_name}': "
            f"{exc.error_count()} invalid field(s)"
        ) from exc
