"""ドメインモデル - 外部依存なしのデータ構造

Firestore 上の永続化スキーマ（camelCase）との変換もここで定義する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventColor(Enum):
    """カレンダーイベントの表示色"""

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"


class TransactionType(Enum):
    """収支の種別"""

    INCOME = "income"
    EXPENSE = "expense"


class SecretItemType(Enum):
    """シークレットスペースの項目種別"""

    FOLDER = "folder"
    NOTE = "note"


# ── 認証・リクエストコンテキスト ─────────────────────────────────────────────


@dataclass(frozen=True)
class VerifiedIdentity:
    """ID トークン検証の結果"""

    uid: str
    email: str = ""
    display_name: str = ""
    photo_url: str = ""


@dataclass(frozen=True)
class RequestContext:
    """1リクエスト分の認証済みコンテキスト（サービス呼び出しに明示的に渡す）"""

    uid: str
    email: str = ""
    display_name: str = ""
    photo_url: str = ""


# ── エンティティ ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UserProfile:
    """ユーザープロファイル（users/{uid}）"""

    uid: str
    email: str
    display_name: str = ""
    photo_url: str = ""
    friends: list[str] = field(default_factory=list)
    friend_requests_sent: list[str] = field(default_factory=list)
    friend_requests_received: list[str] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> UserProfile:
        return cls(
            uid=data.get("uid") or doc_id,
            email=data.get("email") or "",
            display_name=data.get("displayName") or "",
            photo_url=data.get("photoURL") or "",
            friends=list(data.get("friends") or []),
            friend_requests_sent=list(data.get("friendRequestsSent") or []),
            friend_requests_received=list(data.get("friendRequestsReceived") or []),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
            "photoURL": self.photo_url,
            "friends": list(self.friends),
            "friendRequestsSent": list(self.friend_requests_sent),
            "friendRequestsReceived": list(self.friend_requests_received),
        }


@dataclass(frozen=True)
class CalendarEvent:
    """カレンダーイベント（events/{id}）"""

    id: str
    owner_uid: str
    title: str
    date: str  # YYYY-MM-DD
    description: str = ""
    color: str = EventColor.BLUE.value
    is_completed: bool = False
    shared_with: list[str] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> CalendarEvent:
        return cls(
            id=doc_id,
            owner_uid=data.get("ownerUid") or "",
            title=data.get("title") or "",
            date=data.get("date") or "",
            description=data.get("description") or "",
            color=data.get("color") or EventColor.BLUE.value,
            is_completed=bool(data.get("isCompleted", False)),
            shared_with=list(data.get("sharedWith") or []),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "ownerUid": self.owner_uid,
            "title": self.title,
            "date": self.date,
            "description": self.description,
            "color": self.color,
            "isCompleted": self.is_completed,
            "sharedWith": list(self.shared_with),
        }


@dataclass(frozen=True)
class Todo:
    """ToDo（todos/{id}）。synced_event_id はカレンダーイベントへの弱参照"""

    id: str
    owner_uid: str
    text: str
    date: str  # YYYY-MM-DD
    is_completed: bool = False
    synced_event_id: str | None = None

    @property
    def is_synced(self) -> bool:
        return bool(self.synced_event_id)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Todo:
        return cls(
            id=doc_id,
            owner_uid=data.get("ownerUid") or "",
            text=data.get("text") or "",
            date=data.get("date") or "",
            is_completed=bool(data.get("isCompleted", False)),
            synced_event_id=data.get("syncedEventId") or None,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "ownerUid": self.owner_uid,
            "text": self.text,
            "date": self.date,
            "isCompleted": self.is_completed,
            "syncedEventId": self.synced_event_id,
        }


@dataclass(frozen=True)
class Transaction:
    """収支レコード（finance/{id}）"""

    id: str
    owner_uid: str
    type: str  # "income" | "expense"
    amount: float
    description: str
    date: str  # YYYY-MM-DD
    category: str = ""

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Transaction:
        return cls(
            id=doc_id,
            owner_uid=data.get("ownerUid") or "",
            type=data.get("type") or TransactionType.EXPENSE.value,
            amount=float(data.get("amount") or 0),
            description=data.get("description") or "",
            date=data.get("date") or "",
            category=data.get("category") or "",
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "ownerUid": self.owner_uid,
            "type": self.type,
            "amount": self.amount,
            "description": self.description,
            "date": self.date,
            "category": self.category,
        }


@dataclass(frozen=True)
class SecretItem:
    """シークレットスペースのフォルダ・ノート（secretItems/{id}）

    parent_id が None ならルート直下。
    """

    id: str
    owner_uid: str
    type: str  # "folder" | "note"
    name: str
    parent_id: str | None
    updated_at: str  # ISO8601 UTC
    content: str | None = None  # ノートのみ
    shared_with: list[str] = field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return self.type == SecretItemType.FOLDER.value

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> SecretItem:
        return cls(
            id=doc_id,
            owner_uid=data.get("ownerUid") or "",
            type=data.get("type") or SecretItemType.NOTE.value,
            name=data.get("name") or "",
            parent_id=data.get("parentId") or None,
            updated_at=data.get("updatedAt") or "",
            content=data.get("content"),
            shared_with=list(data.get("sharedWith") or []),
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "ownerUid": self.owner_uid,
            "type": self.type,
            "name": self.name,
            "parentId": self.parent_id,
            "updatedAt": self.updated_at,
            "sharedWith": list(self.shared_with),
        }
        if self.content is not None:
            doc["content"] = self.content
        return doc


# ── 結果・集計 ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ActionResult:
    """更新系操作の結果

    affected は呼び出し側が再取得すべきコレクション名。
    """

    success: bool
    message: str
    id: str | None = None
    affected: tuple[str, ...] = ()


@dataclass(frozen=True)
class FinanceSummary:
    """収支サマリー"""

    income: float
    expense: float

    @property
    def balance(self) -> float:
        return self.income - self.expense


@dataclass(frozen=True)
class FriendsOverview:
    """フレンド一覧と保留中リクエスト"""

    friends: list[UserProfile] = field(default_factory=list)
    requests_received: list[UserProfile] = field(default_factory=list)
    requests_sent: list[UserProfile] = field(default_factory=list)


@dataclass(frozen=True)
class Dashboard:
    """ダッシュボード（指定日の予定・ToDo と収支サマリー）"""

    day: str
    events: list[CalendarEvent]
    todos: list[Todo]
    finance: FinanceSummary
