"""カレンダーイベント API ルート

GET    /api/events        → 200 [CalendarEvent...]
POST   /api/events        → 201 ActionResponse
PATCH  /api/events/{id}   → 200 ActionResponse
DELETE /api/events/{id}   → 200 ActionResponse（連携 ToDo も削除）
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from dailyhub.domain.models import CalendarEvent, RequestContext
from dailyhub.entrypoints.api.deps import get_event_service, get_request_context
from dailyhub.entrypoints.api.schemas import ActionResponse, to_action_response
from dailyhub.services.events import EventService

router = APIRouter(prefix="/events", tags=["events"])


class EventCreateRequest(BaseModel):
    # 必須チェックはサービス層で行い、共通のエラー形式で返す
    title: str | None = None
    date: str | None = None
    description: str = ""
    color: str | None = None


class EventUpdateRequest(BaseModel):
    title: str | None = None
    date: str | None = None
    description: str | None = None
    color: str | None = None
    is_completed: bool | None = None


class EventResponse(BaseModel):
    id: str
    title: str
    date: str
    description: str
    color: str
    is_completed: bool
    shared_with: list[str]

    @classmethod
    def from_model(cls, e: CalendarEvent) -> EventResponse:
        return cls(
            id=e.id,
            title=e.title,
            date=e.date,
            description=e.description,
            color=e.color,
            is_completed=e.is_completed,
            shared_with=e.shared_with,
        )


@router.get("", response_model=list[EventResponse])
def list_events(
    ctx: RequestContext = Depends(get_request_context),
    service: EventService = Depends(get_event_service),
) -> list[EventResponse]:
    """自分のイベント一覧を返す"""
    return [EventResponse.from_model(e) for e in service.list(ctx)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ActionResponse)
def create_event(
    body: EventCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: EventService = Depends(get_event_service),
) -> ActionResponse:
    """イベントを作成する"""
    result = service.create(
        ctx,
        title=body.title,
        date=body.date,
        description=body.description,
        color=body.color,
    )
    return to_action_response(result)


@router.patch("/{event_id}", response_model=ActionResponse)
def update_event(
    event_id: str,
    body: EventUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: EventService = Depends(get_event_service),
) -> ActionResponse:
    """送られたフィールドだけを更新する"""
    result = service.update(ctx, event_id, body.model_dump(exclude_unset=True))
    return to_action_response(result)


@router.delete("/{event_id}", response_model=ActionResponse)
def delete_event(
    event_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: EventService = Depends(get_event_service),
) -> ActionResponse:
    """イベントを削除する"""
    return to_action_response(service.delete(ctx, event_id))
