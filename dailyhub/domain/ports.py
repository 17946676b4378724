"""Ports - 外部サービスのインターフェース定義（ABC）

ドキュメントストアと ID プロバイダは外部コラボレータとして扱い、
ここでは契約だけを定義する。実装（Adapter）は全ての抽象メソッドを実装する。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from dailyhub.domain.models import VerifiedIdentity

# コレクション名（Firestore のトップレベルコレクション）
USERS = "users"
EVENTS = "events"
TODOS = "todos"
FINANCE = "finance"
SECRET_ITEMS = "secretItems"


@dataclass(frozen=True)
class ArrayUnion:
    """update 時に配列フィールドへ値を追加する（重複は追加しない）"""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class ArrayRemove:
    """update 時に配列フィールドから値を取り除く"""

    values: tuple[Any, ...]


class IdentityVerifier(ABC):
    """ID トークンの検証（Firebase Auth 等）"""

    @abstractmethod
    def verify(self, token: str) -> VerifiedIdentity:
        """トークンを検証して VerifiedIdentity を返す。失敗時は InvalidTokenError"""
        pass


class WriteBatch(ABC):
    """複数ドキュメントへの書き込みをまとめて適用する

    commit() した書き込みは全て適用されるか、全て適用されないかのどちらか。
    """

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """部分更新。対象ドキュメントが存在しない場合 commit が失敗する"""
        pass

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        pass


class DocumentStore(ABC):
    """コレクション指向のドキュメントストア（Firestore 等）"""

    @abstractmethod
    def new_id(self, collection: str) -> str:
        """書き込み前にドキュメントIDを払い出す"""
        pass

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """ドキュメントを取得。存在しない場合は None"""
        pass

    @abstractmethod
    def insert(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> str:
        """ドキュメントを作成し、IDを返す"""
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """部分更新。存在しない場合は StoreError"""
        pass

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        pass

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: dict[str, Any],
        limit: int | None = None,
    ) -> list[tuple[str, dict[str, Any]]]:
        """等価フィルター（AND）でコレクションを検索し、(id, data) のリストを返す"""
        pass

    @abstractmethod
    def batch(self) -> WriteBatch:
        pass
