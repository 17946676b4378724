"""ダッシュボード API ルート

GET /api/dashboard?day=YYYY-MM-DD  → 200 { day, events, todos, finance }
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dailyhub.domain.models import RequestContext
from dailyhub.entrypoints.api.deps import get_dashboard_service, get_request_context
from dailyhub.entrypoints.api.routes.events import EventResponse
from dailyhub.entrypoints.api.routes.todos import TodoResponse
from dailyhub.entrypoints.api.routes.transactions import SummaryResponse
from dailyhub.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardResponse(BaseModel):
    day: str
    events: list[EventResponse]
    todos: list[TodoResponse]
    finance: SummaryResponse


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    day: str | None = None,
    ctx: RequestContext = Depends(get_request_context),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """指定日（省略時は今日）の予定・ToDo と収支サマリー"""
    dashboard = service.build(ctx, day)
    return DashboardResponse(
        day=dashboard.day,
        events=[EventResponse.from_model(e) for e in dashboard.events],
        todos=[TodoResponse.from_model(t) for t in dashboard.todos],
        finance=SummaryResponse.from_model(dashboard.finance),
    )
