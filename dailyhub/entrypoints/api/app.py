"""FastAPI アプリケーション

DailyHub バックエンド API。
Cloud Run Service として動作し、Firebase Auth で認証する。

エンドポイント一覧:
  GET    /api/profile
  GET    /api/users/search?email=
  GET    /api/events
  POST   /api/events
  PATCH  /api/events/{id}
  DELETE /api/events/{id}
  GET    /api/todos
  POST   /api/todos
  PATCH  /api/todos/{id}
  POST   /api/todos/{id}/toggle
  POST   /api/todos/{id}/sync
  POST   /api/todos/{id}/unlink
  DELETE /api/todos/{id}
  GET    /api/transactions
  GET    /api/transactions/summary
  POST   /api/transactions
  PATCH  /api/transactions/{id}
  DELETE /api/transactions/{id}
  GET    /api/secret-items
  POST   /api/secret-items
  PATCH  /api/secret-items/{id}
  DELETE /api/secret-items/{id}
  GET    /api/friends
  POST   /api/friends/requests
  POST   /api/friends/requests/{uid}/accept
  POST   /api/friends/requests/{uid}/reject
  DELETE /api/friends/{uid}
  GET    /api/dashboard?day=
  GET    /health              ← 認証不要
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

from dailyhub.config import cors_origins_from_env
from dailyhub.domain.errors import (
    AlreadyFriendsError,
    AlreadySyncedError,
    AuthMismatchError,
    DailyHubError,
    DuplicateRequestError,
    InvalidTokenError,
    NotFoundError,
    NotSyncedError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from dailyhub.entrypoints.api.routes import (
    dashboard,
    events,
    friends,
    profiles,
    secret_items,
    todos,
    transactions,
)
from dailyhub.entrypoints.api.schemas import ErrorResponse
from dailyhub.logging_config import setup_logging

# ── ロギング初期化 ───────────────────────────────────────────────────────────
setup_logging()
logger = logging.getLogger(__name__)

# ── FastAPI アプリ ───────────────────────────────────────────────────────────
app = FastAPI(
    title="DailyHub API",
    description="カレンダー・ToDo・家計簿・シークレットノート・フレンドの個人向けバックエンド API",
    version="1.0.0",
)

# ── ドメイン例外 → HTTP ステータス ────────────────────────────────────────────
# サブクラスは MRO を辿って最も近い親の対応を使う（CycleError → 400）
_STATUS_BY_ERROR: dict[type[DailyHubError], int] = {
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    AuthMismatchError: status.HTTP_403_FORBIDDEN,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AlreadySyncedError: status.HTTP_409_CONFLICT,
    NotSyncedError: status.HTTP_409_CONFLICT,
    AlreadyFriendsError: status.HTTP_409_CONFLICT,
    DuplicateRequestError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: DailyHubError) -> int:
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(DailyHubError)
async def _handle_domain_error(request: Request, exc: DailyHubError) -> JSONResponse:
    """ドメイン例外を {"success": false, "message", "error"} 形式で返す"""
    status_code = status_for(exc)
    logger.warning(
        "Request failed: %s %s - %s (%d): %s",
        request.method,
        request.url.path,
        exc.code,
        status_code,
        exc.message,
    )
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": exc.message, "error": exc.code},
    )


# ── グローバル例外ミドルウェア ──────────────────────────────────────────────────
# 【登録順の注意】
#   add_middleware は後から登録したものが外側になる。
#   このミドルウェアを CORSMiddleware より先に登録して内側に置くことで、
#   500 レスポンスにも CORS ヘッダーが付与される。
#
# スタック: ServerErrorMiddleware → CORSMiddleware → このMW → ExceptionMiddleware → Routes


@app.middleware("http")
async def _catch_unhandled_exceptions(
    request: Request, call_next: Callable[[Request], Response]
) -> Response:
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(
            "Unhandled exception: %s %s - %s",
            request.method,
            request.url.path,
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


# ── CORS（フロントエンドからのリクエストを許可） ─────────────────────────────
# CORS_ORIGINS 環境変数でカンマ区切りのオリジンを指定可能
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_from_env(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Owner-Uid"],
)

# ── ルーター登録 ─────────────────────────────────────────────────────────────
_PREFIX = "/api"
# OpenAPI 上のエラーレスポンス（形式は _handle_domain_error と同じ）
_ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 503)
}

for _module in (
    profiles,
    events,
    todos,
    transactions,
    secret_items,
    friends,
    dashboard,
):
    app.include_router(_module.router, prefix=_PREFIX, responses=_ERROR_RESPONSES)


@app.get("/health")
async def health() -> dict:
    """ヘルスチェックエンドポイント（Cloud Run の起動確認用）"""
    return {"status": "ok"}


logger.info("DailyHub API started")
