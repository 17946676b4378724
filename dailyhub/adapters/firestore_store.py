"""Firestore DocumentStore Adapter

DocumentStore / WriteBatch の Firestore 実装。

Firestore コレクション構造:
  users/{uid}              ← ユーザープロファイル（フレンド関係を埋め込み）
  events/{eventId}         ← カレンダーイベント（ownerUid で所有者を判定）
  todos/{todoId}           ← ToDo（syncedEventId でイベントに連携）
  finance/{transactionId}  ← 収支
  secretItems/{itemId}     ← フォルダ・ノート（parentId でツリーを構成）
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore

from dailyhub.domain.errors import StoreError
from dailyhub.domain.ports import ArrayRemove, ArrayUnion, DocumentStore, WriteBatch

logger = logging.getLogger(__name__)

# Firestore のバッチ書き込みは1回あたり500件まで
MAX_BATCH_WRITES = 500


@contextmanager
def _store_call(action: str, collection: str) -> Iterator[None]:
    """Firestore の API エラーを StoreError に変換する"""
    try:
        yield
    except GoogleAPICallError as e:
        logger.error("Firestore %s failed: collection=%s - %s", action, collection, e)
        raise StoreError(e.message or str(e)) from e


def _to_firestore(fields: dict[str, Any]) -> dict[str, Any]:
    """ArrayUnion / ArrayRemove センチネルを Firestore の Transform に置き換える"""
    converted: dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, ArrayUnion):
            converted[key] = firestore.ArrayUnion(list(value.values))
        elif isinstance(value, ArrayRemove):
            converted[key] = firestore.ArrayRemove(list(value.values))
        else:
            converted[key] = value
    return converted


class FirestoreWriteBatch(WriteBatch):
    """
    Firestore のバッチ書き込み。

    書き込みは commit() まで溜めておき、500件ごとに Client.batch() で適用する。
    500件を超える場合はチャンク単位でのみアトミック。
    """

    def __init__(self, db: firestore.Client) -> None:
        self._db = db
        self._writes: list[tuple[str, str, str, dict[str, Any] | None]] = []

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._writes.append(("set", collection, doc_id, _to_firestore(data)))

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        self._writes.append(("update", collection, doc_id, _to_firestore(fields)))

    def delete(self, collection: str, doc_id: str) -> None:
        self._writes.append(("delete", collection, doc_id, None))

    def __len__(self) -> int:
        return len(self._writes)

    def commit(self) -> None:
        if not self._writes:
            return
        for start in range(0, len(self._writes), MAX_BATCH_WRITES):
            chunk = self._writes[start : start + MAX_BATCH_WRITES]
            batch = self._db.batch()
            for op, collection, doc_id, data in chunk:
                ref = self._db.collection(collection).document(doc_id)
                if op == "set":
                    batch.set(ref, data)
                elif op == "update":
                    batch.update(ref, data)
                else:
                    batch.delete(ref)
            with _store_call("batch commit", chunk[0][1]):
                batch.commit()
        logger.debug("Committed batch: writes=%d", len(self._writes))
        self._writes = []


class FirestoreDocumentStore(DocumentStore):
    """
    Firestore を使った DocumentStore 実装。
    """

    def __init__(self, db: firestore.Client) -> None:
        """
        Args:
            db: 初期化済みの Firestore クライアント
        """
        self._db = db

    def new_id(self, collection: str) -> str:
        # document() は通信せずに自動IDを払い出す
        return self._db.collection(collection).document().id

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with _store_call("get", collection):
            snap = self._db.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return snap.to_dict() or {}

    def insert(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> str:
        doc_id = doc_id or self.new_id(collection)
        with _store_call("insert", collection):
            self._db.collection(collection).document(doc_id).set(_to_firestore(data))
        return doc_id

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        with _store_call("update", collection):
            self._db.collection(collection).document(doc_id).update(
                _to_firestore(fields)
            )

    def delete(self, collection: str, doc_id: str) -> None:
        with _store_call("delete", collection):
            self._db.collection(collection).document(doc_id).delete()

    def query(
        self,
        collection: str,
        filters: dict[str, Any],
        limit: int | None = None,
    ) -> list[tuple[str, dict[str, Any]]]:
        query = self._db.collection(collection)
        for field_name, value in filters.items():
            query = query.where(field_name, "==", value)
        if limit is not None:
            query = query.limit(limit)
        with _store_call("query", collection):
            return [(snap.id, snap.to_dict() or {}) for snap in query.stream()]

    def batch(self) -> FirestoreWriteBatch:
        return FirestoreWriteBatch(self._db)
