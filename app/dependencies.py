from typing import Annotated

from fastapi import Depends, Header, Request

from app.services.dashboard import DashboardService


def get_dashboard_service(request: Request) -> DashboardService:
    return request.app.state.dashboard_service


def get_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str | None:
    """Forward the caller's bearer token to the price API, if one was sent."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


DashboardDep = Annotated[DashboardService, Depends(get_dashboard_service)]
BearerTokenDep = Annotated[str | None, Depends(get_bearer_token)]
