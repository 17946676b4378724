"""ToDo API ルート

GET    /api/todos               → 200 [Todo...]
POST   /api/todos               → 201 ActionResponse（sync=true でカレンダーにも登録）
PATCH  /api/todos/{id}          → 200 ActionResponse（テキスト変更）
POST   /api/todos/{id}/toggle   → 200 ActionResponse
POST   /api/todos/{id}/sync     → 200 ActionResponse（後からカレンダー連携）
POST   /api/todos/{id}/unlink   → 200 ActionResponse
DELETE /api/todos/{id}          → 200 ActionResponse（連携イベントも削除）
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from dailyhub.domain.models import RequestContext, Todo
from dailyhub.entrypoints.api.deps import get_request_context, get_todo_service
from dailyhub.entrypoints.api.schemas import ActionResponse, to_action_response
from dailyhub.services.todos import TodoService

router = APIRouter(prefix="/todos", tags=["todos"])


class TodoCreateRequest(BaseModel):
    text: str | None = None
    date: str | None = None
    sync: bool = False
    color: str | None = None


class TodoUpdateRequest(BaseModel):
    text: str | None = None


class TodoSyncRequest(BaseModel):
    color: str | None = None


class TodoResponse(BaseModel):
    id: str
    text: str
    date: str
    is_completed: bool
    synced_event_id: str | None

    @classmethod
    def from_model(cls, t: Todo) -> TodoResponse:
        return cls(
            id=t.id,
            text=t.text,
            date=t.date,
            is_completed=t.is_completed,
            synced_event_id=t.synced_event_id,
        )


@router.get("", response_model=list[TodoResponse])
def list_todos(
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> list[TodoResponse]:
    """自分の ToDo 一覧を返す"""
    return [TodoResponse.from_model(t) for t in service.list(ctx)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ActionResponse)
def create_todo(
    body: TodoCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> ActionResponse:
    result = service.create(
        ctx, text=body.text, date=body.date, sync=body.sync, color=body.color
    )
    return to_action_response(result)


@router.patch("/{todo_id}", response_model=ActionResponse)
def update_todo(
    todo_id: str,
    body: TodoUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> ActionResponse:
    return to_action_response(service.update_text(ctx, todo_id, body.text))


@router.post("/{todo_id}/toggle", response_model=ActionResponse)
def toggle_todo(
    todo_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> ActionResponse:
    return to_action_response(service.toggle(ctx, todo_id))


@router.post("/{todo_id}/sync", response_model=ActionResponse)
def sync_todo(
    todo_id: str,
    body: TodoSyncRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> ActionResponse:
    return to_action_response(service.sync(ctx, todo_id, body.color))


@router.post("/{todo_id}/unlink", response_model=ActionResponse)
def unlink_todo(
    todo_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> ActionResponse:
    return to_action_response(service.unlink(ctx, todo_id))


@router.delete("/{todo_id}", response_model=ActionResponse)
def delete_todo(
    todo_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: TodoService = Depends(get_todo_service),
) -> ActionResponse:
    return to_action_response(service.delete(ctx, todo_id))
