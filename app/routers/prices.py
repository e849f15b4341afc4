from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import BearerTokenDep, DashboardDep
from app.mappers.stats_summarizer import StatsMode
from app.schemas.pivot import ChartData, PivotTable, SiteChartData, StatsResult
from app.schemas.responses import DashboardResponse

router = APIRouter(prefix="/prices")

HotelNamesQuery = Annotated[list[str] | None, Query()]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    service: DashboardDep,
    token: BearerTokenDep,
    start_date: date,
    end_date: date,
    hotel_names: HotelNamesQuery = None,
    stats_date: date | None = None,
) -> DashboardResponse:
    return await service.dashboard(
        hotel_names or [], start_date, end_date, stats_date=stats_date, token=token,
    )


@router.get("/pivot", response_model=PivotTable)
async def get_pivot_table(
    service: DashboardDep,
    token: BearerTokenDep,
    start_date: date,
    end_date: date,
    hotel_names: HotelNamesQuery = None,
) -> PivotTable:
    return await service.pivot_table(hotel_names or [], start_date, end_date, token=token)


@router.get("/stats", response_model=StatsResult)
async def get_stats(
    service: DashboardDep,
    token: BearerTokenDep,
    start_date: date,
    end_date: date,
    hotel_names: HotelNamesQuery = None,
    mode: StatsMode = StatsMode.pivot,
    stats_date: date | None = None,
) -> StatsResult:
    return await service.stats(
        hotel_names or [], start_date, end_date,
        mode=mode, target_date=stats_date, token=token,
    )


@router.get("/chart", response_model=ChartData)
async def get_chart(
    service: DashboardDep,
    token: BearerTokenDep,
    start_date: date,
    end_date: date,
    hotel_names: HotelNamesQuery = None,
) -> ChartData:
    return await service.chart(hotel_names or [], start_date, end_date, token=token)


@router.get("/sites", response_model=SiteChartData)
async def get_site_chart(
    service: DashboardDep,
    token: BearerTokenDep,
    hotel_name: str,
    start_date: date,
    end_date: date,
) -> SiteChartData:
    return await service.site_chart(hotel_name, start_date, end_date, token=token)
