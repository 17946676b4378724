"""共通テストフィクスチャ

全テストから利用可能なインメモリのストア・ID 検証器とサンプルデータを提供。

- InMemoryDocumentStore: DocumentStore の辞書実装。WriteBatch は commit 時に
  全件を検証してから適用するため、途中で失敗すると何も書き込まれない
- FakeIdentityVerifier: 事前登録したトークンだけを有効とする
"""

from __future__ import annotations

import copy
import itertools
from typing import Any

import pytest
from dailyhub.domain.errors import InvalidTokenError, StoreError
from dailyhub.domain.models import RequestContext, VerifiedIdentity
from dailyhub.domain.ports import (
    USERS,
    ArrayRemove,
    ArrayUnion,
    DocumentStore,
    IdentityVerifier,
    WriteBatch,
)

# ========== テスト用の Port 実装 ==========


def _apply_fields(doc: dict[str, Any], fields: dict[str, Any]) -> None:
    for key, value in fields.items():
        if isinstance(value, ArrayUnion):
            current = list(doc.get(key) or [])
            current.extend(v for v in value.values if v not in current)
            doc[key] = current
        elif isinstance(value, ArrayRemove):
            doc[key] = [v for v in doc.get(key) or [] if v not in value.values]
        else:
            doc[key] = value


class InMemoryWriteBatch(WriteBatch):
    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store
        self._ops: list[tuple[str, str, str, dict[str, Any] | None]] = []

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._ops.append(("set", collection, doc_id, data))

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        self._ops.append(("update", collection, doc_id, fields))

    def delete(self, collection: str, doc_id: str) -> None:
        self._ops.append(("delete", collection, doc_id, None))

    def commit(self) -> None:
        self._store.commits += 1
        staged = copy.deepcopy(self._store.collections)
        for op, collection, doc_id, data in self._ops:
            docs = staged.setdefault(collection, {})
            if op == "set":
                docs[doc_id] = {}
                _apply_fields(docs[doc_id], data or {})
            elif op == "update":
                if doc_id not in docs:
                    raise StoreError(f"No document to update: {collection}/{doc_id}")
                _apply_fields(docs[doc_id], data or {})
            else:
                docs.pop(doc_id, None)
        self._store.collections = staged
        self._ops = []


class InMemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.commits = 0
        self._ids = itertools.count(1)

    def new_id(self, collection: str) -> str:
        return f"{collection}-{next(self._ids)}"

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self.collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def insert(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> str:
        doc_id = doc_id or self.new_id(collection)
        self.collections.setdefault(collection, {})[doc_id] = {}
        _apply_fields(self.collections[collection][doc_id], data)
        return doc_id

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        doc = self.collections.get(collection, {}).get(doc_id)
        if doc is None:
            raise StoreError(f"No document to update: {collection}/{doc_id}")
        _apply_fields(doc, fields)

    def delete(self, collection: str, doc_id: str) -> None:
        self.collections.get(collection, {}).pop(doc_id, None)

    def query(
        self,
        collection: str,
        filters: dict[str, Any],
        limit: int | None = None,
    ) -> list[tuple[str, dict[str, Any]]]:
        results = [
            (doc_id, copy.deepcopy(doc))
            for doc_id, doc in self.collections.get(collection, {}).items()
            if all(k in doc and doc[k] == v for k, v in filters.items())
        ]
        return results[:limit] if limit is not None else results

    def batch(self) -> InMemoryWriteBatch:
        return InMemoryWriteBatch(self)

    # テスト用ヘルパー
    def docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.get(collection, {})


class FakeIdentityVerifier(IdentityVerifier):
    def __init__(self, identities: dict[str, VerifiedIdentity]) -> None:
        self._identities = identities

    def verify(self, token: str) -> VerifiedIdentity:
        if token not in self._identities:
            raise InvalidTokenError("Invalid or expired ID token")
        return self._identities[token]


# ========== サンプルデータ ==========

ALICE_TOKEN = "token-alice"
BOB_TOKEN = "token-bob"


@pytest.fixture
def alice_identity() -> VerifiedIdentity:
    return VerifiedIdentity(
        uid="alice-uid", email="alice@example.com", display_name="Alice"
    )


@pytest.fixture
def bob_identity() -> VerifiedIdentity:
    return VerifiedIdentity(uid="bob-uid", email="bob@example.com", display_name="Bob")


@pytest.fixture
def alice(alice_identity) -> RequestContext:
    """検証済みユーザー Alice のコンテキスト"""
    return RequestContext(
        uid=alice_identity.uid,
        email=alice_identity.email,
        display_name=alice_identity.display_name,
    )


@pytest.fixture
def bob(bob_identity) -> RequestContext:
    """検証済みユーザー Bob のコンテキスト"""
    return RequestContext(
        uid=bob_identity.uid,
        email=bob_identity.email,
        display_name=bob_identity.display_name,
    )


# ========== Port フィクスチャ ==========


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """空のインメモリストア"""
    return InMemoryDocumentStore()


@pytest.fixture
def verifier(alice_identity, bob_identity) -> FakeIdentityVerifier:
    """Alice / Bob のトークンだけを受け付ける検証器"""
    return FakeIdentityVerifier({ALICE_TOKEN: alice_identity, BOB_TOKEN: bob_identity})


@pytest.fixture
def seed_user(store):
    """users/{uid} にプロファイルを作成するヘルパー"""

    def _seed(uid: str, email: str, **fields: Any) -> None:
        store.insert(
            USERS,
            {
                "uid": uid,
                "email": email,
                "displayName": fields.pop("displayName", ""),
                "photoURL": "",
                "friends": fields.pop("friends", []),
                "friendRequestsSent": fields.pop("friendRequestsSent", []),
                "friendRequestsReceived": fields.pop("friendRequestsReceived", []),
                **fields,
            },
            doc_id=uid,
        )

    return _seed
