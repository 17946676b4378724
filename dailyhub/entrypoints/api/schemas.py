"""API 共通のレスポンスモデル"""

from __future__ import annotations

from pydantic import BaseModel

from dailyhub.domain.models import ActionResult


class ActionResponse(BaseModel):
    """更新系エンドポイントの共通レスポンス

    affected: 表示を再取得すべきコレクション名
    """

    success: bool
    message: str
    id: str | None = None
    affected: list[str] = []


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str


def to_action_response(result: ActionResult) -> ActionResponse:
    return ActionResponse(
        success=result.success,
        message=result.message,
        id=result.id,
        affected=list(result.affected),
    )
