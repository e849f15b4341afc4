from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from app.schemas.pivot import ChartData, PivotTable, StatsSummary
from app.schemas.prices import HotelFetchError


class DashboardResponse(BaseModel):
    start_date: date
    end_date: date
    hotel_names: list[str]
    table: PivotTable
    stats: StatsSummary
    chart: ChartData
    errors: list[HotelFetchError] = []


class HealthResponse(BaseModel):
    status: str
