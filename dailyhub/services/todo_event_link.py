"""TodoEventLinker - ToDo とカレンダーイベントの連携

ToDo は syncedEventId で最大1件のイベントを参照する。
連携・解除・連動削除・編集の伝播は全て1つの WriteBatch で書き込み、
ToDo とイベントが片方だけ更新された状態を残さない。

編集の伝播は ToDo → イベントの一方向のみ（イベント側の編集は ToDo に反映しない）。
"""

from __future__ import annotations

import logging
from typing import Any

from dailyhub.domain.errors import AlreadySyncedError, NotSyncedError
from dailyhub.domain.models import CalendarEvent, RequestContext, Todo
from dailyhub.domain.ports import EVENTS, TODOS, DocumentStore

logger = logging.getLogger(__name__)

SYNC_TITLE_PREFIX = "[Todo] "
SYNC_DESCRIPTION = "Synced from Todo List"


def synced_title(text: str) -> str:
    """連携イベントのタイトル"""
    return f"{SYNC_TITLE_PREFIX}{text}"


class TodoEventLinker:
    """ToDo ⇔ CalendarEvent の双方向リンクを管理する"""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def create_todo(
        self,
        ctx: RequestContext,
        text: str,
        date: str,
        sync: bool,
        color: str,
    ) -> Todo:
        """ToDo を作成する。sync=True なら連携イベントも同時に作成する"""
        batch = self._store.batch()
        event_id = None
        if sync:
            event_id = self._store.new_id(EVENTS)
            event = CalendarEvent(
                id=event_id,
                owner_uid=ctx.uid,
                title=synced_title(text),
                date=date,
                description=SYNC_DESCRIPTION,
                color=color,
            )
            batch.set(EVENTS, event_id, event.to_document())

        todo = Todo(
            id=self._store.new_id(TODOS),
            owner_uid=ctx.uid,
            text=text,
            date=date,
            synced_event_id=event_id,
        )
        batch.set(TODOS, todo.id, todo.to_document())
        batch.commit()
        logger.info(
            "Todo created: uid=%s, todo_id=%s, synced_event_id=%s",
            ctx.uid,
            todo.id,
            event_id,
        )
        return todo

    def sync(self, ctx: RequestContext, todo: Todo, color: str) -> CalendarEvent:
        """
        未連携の ToDo にイベントを作成して連携する。

        Raises:
            AlreadySyncedError: 既に連携済みの場合
        """
        if todo.is_synced:
            raise AlreadySyncedError("Todo is already synced to a calendar event")

        event = CalendarEvent(
            id=self._store.new_id(EVENTS),
            owner_uid=ctx.uid,
            title=synced_title(todo.text),
            date=todo.date,
            description=SYNC_DESCRIPTION,
            color=color,
            is_completed=todo.is_completed,
        )
        batch = self._store.batch()
        batch.set(EVENTS, event.id, event.to_document())
        batch.update(TODOS, todo.id, {"syncedEventId": event.id, "ownerUid": ctx.uid})
        batch.commit()
        logger.info(
            "Todo synced: uid=%s, todo_id=%s, event_id=%s", ctx.uid, todo.id, event.id
        )
        return event

    def unlink(self, ctx: RequestContext, todo: Todo) -> None:
        """
        連携イベントを削除し、ToDo の syncedEventId をクリアする。

        Raises:
            NotSyncedError: 連携していない場合
        """
        if not todo.is_synced:
            raise NotSyncedError("Todo is not synced to a calendar event")

        batch = self._store.batch()
        if self._linked_event(ctx, todo) is not None:
            batch.delete(EVENTS, todo.synced_event_id)
        batch.update(TODOS, todo.id, {"syncedEventId": None, "ownerUid": ctx.uid})
        batch.commit()
        logger.info(
            "Todo unlinked: uid=%s, todo_id=%s, event_id=%s",
            ctx.uid,
            todo.id,
            todo.synced_event_id,
        )

    def update_todo(
        self, ctx: RequestContext, todo: Todo, fields: dict[str, Any]
    ) -> None:
        """
        ToDo を更新し、テキスト・完了状態の変更を連携イベントへ伝播する。

        Args:
            fields: 永続化スキーマのキー（"text", "isCompleted" 等）
        """
        batch = self._store.batch()
        batch.update(TODOS, todo.id, {**fields, "ownerUid": ctx.uid})

        event_fields: dict[str, Any] = {}
        if "text" in fields:
            event_fields["title"] = synced_title(fields["text"])
        if "isCompleted" in fields:
            event_fields["isCompleted"] = fields["isCompleted"]

        if event_fields and todo.is_synced:
            if self._linked_event(ctx, todo) is not None:
                batch.update(EVENTS, todo.synced_event_id, event_fields)
        batch.commit()

    def delete_todo(self, ctx: RequestContext, todo: Todo) -> bool:
        """ToDo を削除する。連携イベントがあれば一緒に削除し、その場合 True を返す"""
        batch = self._store.batch()
        event_deleted = False
        if todo.is_synced and self._linked_event(ctx, todo) is not None:
            batch.delete(EVENTS, todo.synced_event_id)
            event_deleted = True
        batch.delete(TODOS, todo.id)
        batch.commit()
        logger.info(
            "Todo deleted: uid=%s, todo_id=%s, event_deleted=%s",
            ctx.uid,
            todo.id,
            event_deleted,
        )
        return event_deleted

    def delete_event(self, ctx: RequestContext, event: CalendarEvent) -> int:
        """イベントを削除する。このイベントに連携している ToDo も削除し、その件数を返す"""
        linked = self._store.query(
            TODOS, {"syncedEventId": event.id, "ownerUid": ctx.uid}
        )
        batch = self._store.batch()
        for todo_id, _ in linked:
            batch.delete(TODOS, todo_id)
        batch.delete(EVENTS, event.id)
        batch.commit()
        logger.info(
            "Event deleted: uid=%s, event_id=%s, linked_todos=%d",
            ctx.uid,
            event.id,
            len(linked),
        )
        return len(linked)

    def _linked_event(self, ctx: RequestContext, todo: Todo) -> CalendarEvent | None:
        """連携先イベントを取得。存在しない・他人の所有なら None（警告ログのみ）"""
        data = self._store.get(EVENTS, todo.synced_event_id or "")
        if data is None:
            logger.warning(
                "Dangling syncedEventId: uid=%s, todo_id=%s, event_id=%s",
                ctx.uid,
                todo.id,
                todo.synced_event_id,
            )
            return None
        event = CalendarEvent.from_document(todo.synced_event_id or "", data)
        if event.owner_uid != ctx.uid:
            logger.warning(
                "Linked event owned by another user: uid=%s, todo_id=%s, event_id=%s",
                ctx.uid,
                todo.id,
                event.id,
            )
            return None
        return event
