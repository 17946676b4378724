"""シークレットスペース API ルート

GET    /api/secret-items        → 200 [SecretItem...]
POST   /api/secret-items        → 201 ActionResponse
PATCH  /api/secret-items/{id}   → 200 ActionResponse（name / content / parent_id）
DELETE /api/secret-items/{id}   → 200 ActionResponse（フォルダは子孫ごと削除）
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from dailyhub.domain.models import RequestContext, SecretItem
from dailyhub.entrypoints.api.deps import get_request_context, get_secret_item_service
from dailyhub.entrypoints.api.schemas import ActionResponse, to_action_response
from dailyhub.services.secret_items import SecretItemService

router = APIRouter(prefix="/secret-items", tags=["secret-items"])


class SecretItemCreateRequest(BaseModel):
    parent_id: str | None = None
    type: str | None = None
    name: str | None = None


class SecretItemUpdateRequest(BaseModel):
    """送られたフィールドだけを反映する（parent_id: null はルートへの移動）"""

    name: str | None = None
    content: str | None = None
    parent_id: str | None = None


class SecretItemResponse(BaseModel):
    id: str
    type: str
    name: str
    parent_id: str | None
    updated_at: str
    content: str | None
    shared_with: list[str]

    @classmethod
    def from_model(cls, item: SecretItem) -> SecretItemResponse:
        return cls(
            id=item.id,
            type=item.type,
            name=item.name,
            parent_id=item.parent_id,
            updated_at=item.updated_at,
            content=item.content,
            shared_with=item.shared_with,
        )


@router.get("", response_model=list[SecretItemResponse])
def list_secret_items(
    ctx: RequestContext = Depends(get_request_context),
    service: SecretItemService = Depends(get_secret_item_service),
) -> list[SecretItemResponse]:
    """自分のフォルダ・ノートを全て返す（ツリーの組み立てはクライアント側）"""
    return [SecretItemResponse.from_model(i) for i in service.list(ctx)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ActionResponse)
def create_secret_item(
    body: SecretItemCreateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: SecretItemService = Depends(get_secret_item_service),
) -> ActionResponse:
    result = service.create(ctx, parent_id=body.parent_id, type=body.type, name=body.name)
    return to_action_response(result)


@router.patch("/{item_id}", response_model=ActionResponse)
def update_secret_item(
    item_id: str,
    body: SecretItemUpdateRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: SecretItemService = Depends(get_secret_item_service),
) -> ActionResponse:
    """
    名前変更・本文保存・移動を行う。

    送られたフィールドを全て検証してから1回で書き込む。
    """
    result = service.update(ctx, item_id, body.model_dump(exclude_unset=True))
    return to_action_response(result)


@router.delete("/{item_id}", response_model=ActionResponse)
def delete_secret_item(
    item_id: str,
    ctx: RequestContext = Depends(get_request_context),
    service: SecretItemService = Depends(get_secret_item_service),
) -> ActionResponse:
    return to_action_response(service.delete(ctx, item_id))
