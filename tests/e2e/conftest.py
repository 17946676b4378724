"""E2E テスト用フィクスチャ

Firestore Emulator に接続し、実際の FirestoreDocumentStore を使ってテストする。
Firebase Auth は dependency_overrides でバイパスする。

前提: FIRESTORE_EMULATOR_HOST 環境変数が設定されていること
  例: FIRESTORE_EMULATOR_HOST=localhost:8080 uv run pytest tests/e2e/ -m e2e -v
"""

from __future__ import annotations

import os

import pytest
from dailyhub.config import AppConfig
from dailyhub.domain.models import VerifiedIdentity
from dailyhub.domain.ports import (
    EVENTS,
    FINANCE,
    SECRET_ITEMS,
    TODOS,
    USERS,
    IdentityVerifier,
)
from dailyhub.entrypoints.api import deps
from dailyhub.entrypoints.api.app import app
from fastapi.testclient import TestClient
from google.cloud import firestore

# テスト用固定値
TEST_PROJECT = "test-project"


class _StaticVerifier(IdentityVerifier):
    """トークン文字列をそのまま uid として扱う検証器"""

    def verify(self, token: str) -> VerifiedIdentity:
        return VerifiedIdentity(uid=token, email=f"{token}@example.com")


@pytest.fixture(scope="session")
def firestore_client():
    """Firestore Emulator に接続するクライアント（セッション共有）。

    FIRESTORE_EMULATOR_HOST が未設定の場合は localhost:8080 をデフォルトとして使用する。
    エミュレーターが起動していない場合はテストが接続エラーで失敗する。
    """
    host = os.environ.get("FIRESTORE_EMULATOR_HOST", "localhost:8080")
    os.environ["FIRESTORE_EMULATOR_HOST"] = host
    return firestore.Client(project=TEST_PROJECT)


@pytest.fixture(autouse=True)
def _cleanup_firestore(request, firestore_client):
    """各テスト後に Emulator のデータをクリーンアップ（e2e マーク付きのみ）"""
    yield
    if not request.node.get_closest_marker("e2e"):
        return
    for collection_name in [USERS, EVENTS, TODOS, FINANCE, SECRET_ITEMS]:
        for doc in firestore_client.collection(collection_name).stream():
            doc.reference.delete()


@pytest.fixture
def e2e_client(firestore_client):
    """認証バイパス + 実 Firestore の TestClient。

    Authorization: Bearer <uid> で任意のユーザーとしてリクエストできる。
    """
    deps._firestore_client = firestore_client
    app.dependency_overrides[deps.get_config] = lambda: AppConfig(
        project_id=TEST_PROJECT, local_mode=True
    )
    app.dependency_overrides[deps.get_identity_verifier] = lambda: _StaticVerifier()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    deps._firestore_client = None
