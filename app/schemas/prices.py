import datetime as dt
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, RootModel


class PriceObservation(BaseModel):
    hotel_name: str
    date: dt.date
    room_price: float = Field(ge=0)
    site: str | None = None
    room_type: str | None = None


class ResponseShape(StrEnum):
    keyed = "keyed"  # {"<hotel name>": [...]}
    data = "data"  # {"data": [...]}
    bare = "bare"  # [...]


class DataPriceResponse(BaseModel):
    data: list[PriceObservation] = []


class BarePriceResponse(RootModel[list[PriceObservation]]):
    pass


class HotelFetchError(BaseModel):
    hotel_name: str
    kind: Literal["fetch", "malformed"] = "fetch"
    message: str
    status_code: int | None = None


class PriceFetchReport(BaseModel):
    start_date: dt.date
    end_date: dt.date
    hotel_names: list[str] = []
    observations: dict[str, list[PriceObservation]] = {}
    errors: list[HotelFetchError] = []

    def all_observations(self) -> list[PriceObservation]:
        """Every fetched observation, grouped in request order."""
        return [
            obs
            for name in self.hotel_names
            for obs in self.observations.get(name, [])
        ]

    @property
    def failed_hotels(self) -> list[str]:
        return [err.hotel_name for err in self.errors]
