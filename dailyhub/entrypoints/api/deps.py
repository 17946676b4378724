"""FastAPI 依存性注入

設定・Firestore クライアント・Firebase Auth の初期化と、
リクエストごとの RequestContext の組み立てを担当する。
各ルートは Depends() でこのモジュールの関数を呼び出して
認証済みコンテキストとサービスインスタンスを受け取る。
"""

from __future__ import annotations

import logging
import os

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from google.cloud import firestore

from dailyhub.adapters.firebase_auth import (
    FirebaseIdentityVerifier,
    build_credential,
    get_firebase_app,
)
from dailyhub.adapters.firestore_store import FirestoreDocumentStore
from dailyhub.config import AppConfig
from dailyhub.domain.models import RequestContext
from dailyhub.domain.ports import DocumentStore, IdentityVerifier
from dailyhub.services import (
    AuthorizationGuard,
    DashboardService,
    EventService,
    FinanceService,
    FriendshipService,
    SecretItemService,
    SecretTree,
    TodoEventLinker,
    TodoService,
)

logger = logging.getLogger(__name__)

# ── 設定（プロセス内で1回のみ読み込む） ──────────────────────────────────────

_config: AppConfig | None = None


def get_config() -> AppConfig:
    global _config
    if _config is None:
        _config = AppConfig.from_env()
        logger.info(
            "Config loaded: project=%s, local_mode=%s",
            _config.project_id,
            _config.local_mode,
        )
    return _config


# ── Firestore クライアント（シングルトン） ──────────────────────────────────────

_firestore_client: firestore.Client | None = None


def _get_firestore_client(config: AppConfig) -> firestore.Client:
    global _firestore_client
    if _firestore_client is None:
        if config.local_mode:
            # エミュレータは認証情報を検証しないため、鍵があっても使わない
            _firestore_client = firestore.Client(project=config.project_id)
            logger.info(
                "Firestore client initialized (local mode, emulator=%s)",
                os.getenv("FIRESTORE_EMULATOR_HOST", "<unset>"),
            )
        elif config.has_service_account:
            credential = build_credential(config).get_credential()
            _firestore_client = firestore.Client(
                project=config.project_id, credentials=credential
            )
            logger.info("Firestore client initialized (service account)")
        else:
            _firestore_client = firestore.Client(project=config.project_id)
            logger.info("Firestore client initialized (application default)")
    return _firestore_client


def get_document_store(config: AppConfig = Depends(get_config)) -> DocumentStore:
    """DocumentStore を返す依存関数"""
    return FirestoreDocumentStore(_get_firestore_client(config))


def get_identity_verifier(
    config: AppConfig = Depends(get_config),
) -> IdentityVerifier:
    """IdentityVerifier を返す依存関数"""
    return FirebaseIdentityVerifier(get_firebase_app(config))


# ── 認証 ────────────────────────────────────────────────────────────────────────

# auto_error=False: ヘッダーがない場合も InvalidTokenError として共通のエラー形式で返す
_bearer = HTTPBearer(auto_error=False)


async def get_request_context(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    claimed_uid: str | None = Header(default=None, alias="X-Owner-Uid"),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> RequestContext:
    """
    Authorization: Bearer <id_token> を検証して RequestContext を返す。

    X-Owner-Uid ヘッダーがあれば、検証済み uid と一致することも確認する。

    Raises:
        InvalidTokenError: トークンが無い・無効な場合
        AuthMismatchError: X-Owner-Uid が検証済み uid と一致しない場合
    """
    token = creds.credentials if creds else ""
    return AuthorizationGuard(verifier).open(token, claimed_uid)


# ── サービス依存 ───────────────────────────────────────────────────────────────


def get_event_service(
    store: DocumentStore = Depends(get_document_store),
) -> EventService:
    return EventService(store, TodoEventLinker(store))


def get_todo_service(
    store: DocumentStore = Depends(get_document_store),
) -> TodoService:
    return TodoService(store, TodoEventLinker(store))


def get_finance_service(
    store: DocumentStore = Depends(get_document_store),
) -> FinanceService:
    return FinanceService(store)


def get_secret_item_service(
    store: DocumentStore = Depends(get_document_store),
    config: AppConfig = Depends(get_config),
) -> SecretItemService:
    return SecretItemService(
        store, SecretTree(store, max_depth=config.secret_tree_max_depth)
    )


def get_friendship_service(
    store: DocumentStore = Depends(get_document_store),
) -> FriendshipService:
    return FriendshipService(store)


def get_dashboard_service(
    store: DocumentStore = Depends(get_document_store),
) -> DashboardService:
    return DashboardService(store)
