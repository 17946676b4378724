"""TodoService - ToDo の CRUD と連携操作"""

from __future__ import annotations

import logging
from typing import Any

from dailyhub.domain.models import (
    ActionResult,
    EventColor,
    RequestContext,
    Todo,
)
from dailyhub.domain.ports import EVENTS, TODOS, DocumentStore
from dailyhub.services.records import list_owned, load_owned
from dailyhub.services.todo_event_link import TodoEventLinker
from dailyhub.services.validation import require_choice, require_date, require_text

logger = logging.getLogger(__name__)

DEFAULT_SYNC_COLOR = EventColor.PURPLE.value


class TodoService:
    """所有者スコープの ToDo 操作"""

    def __init__(self, store: DocumentStore, linker: TodoEventLinker) -> None:
        self._store = store
        self._linker = linker

    def list(self, ctx: RequestContext) -> list[Todo]:
        """自分の ToDo 一覧を日付順で返す"""
        todos = list_owned(self._store, ctx, TODOS, Todo)
        return sorted(todos, key=lambda t: t.date)

    def get(self, ctx: RequestContext, todo_id: str) -> Todo:
        return load_owned(self._store, ctx, TODOS, todo_id, Todo, "todo")

    def create(
        self,
        ctx: RequestContext,
        text: Any,
        date: Any,
        sync: bool = False,
        color: Any = None,
    ) -> ActionResult:
        """ToDo を作成する。sync=True ならカレンダーにも登録する"""
        text = require_text(text, "text")
        date = require_date(date)
        color = require_choice(color or DEFAULT_SYNC_COLOR, EventColor, "color")

        todo = self._linker.create_todo(ctx, text, date, sync=sync, color=color)
        return ActionResult(
            success=True,
            message="Todo added successfully",
            id=todo.id,
            affected=(TODOS, EVENTS) if todo.is_synced else (TODOS,),
        )

    def update_text(self, ctx: RequestContext, todo_id: str, text: Any) -> ActionResult:
        """テキストを変更する。連携中ならイベントのタイトルも変更する"""
        text = require_text(text, "text")
        todo = self.get(ctx, todo_id)
        self._linker.update_todo(ctx, todo, {"text": text})
        logger.info("Todo updated: uid=%s, todo_id=%s", ctx.uid, todo.id)
        return ActionResult(
            success=True,
            message="Todo updated successfully",
            id=todo.id,
            affected=(TODOS, EVENTS) if todo.is_synced else (TODOS,),
        )

    def toggle(self, ctx: RequestContext, todo_id: str) -> ActionResult:
        """完了状態を反転する。連携中ならイベントの完了状態も揃える"""
        todo = self.get(ctx, todo_id)
        completed = not todo.is_completed
        self._linker.update_todo(ctx, todo, {"isCompleted": completed})
        logger.info(
            "Todo toggled: uid=%s, todo_id=%s, completed=%s",
            ctx.uid,
            todo.id,
            completed,
        )
        return ActionResult(
            success=True,
            message="Todo completed" if completed else "Todo reopened",
            id=todo.id,
            affected=(TODOS, EVENTS) if todo.is_synced else (TODOS,),
        )

    def sync(self, ctx: RequestContext, todo_id: str, color: Any = None) -> ActionResult:
        """既存の ToDo を後からカレンダーに連携する"""
        color = require_choice(color or DEFAULT_SYNC_COLOR, EventColor, "color")
        todo = self.get(ctx, todo_id)
        event = self._linker.sync(ctx, todo, color)
        return ActionResult(
            success=True,
            message="Todo synced to calendar",
            id=event.id,
            affected=(TODOS, EVENTS),
        )

    def unlink(self, ctx: RequestContext, todo_id: str) -> ActionResult:
        """カレンダー連携を解除する（連携イベントは削除される）"""
        todo = self.get(ctx, todo_id)
        self._linker.unlink(ctx, todo)
        return ActionResult(
            success=True,
            message="Todo unlinked from calendar",
            id=todo.id,
            affected=(TODOS, EVENTS),
        )

    def delete(self, ctx: RequestContext, todo_id: str) -> ActionResult:
        """ToDo を削除する。連携イベントも削除される"""
        todo = self.get(ctx, todo_id)
        event_deleted = self._linker.delete_todo(ctx, todo)
        return ActionResult(
            success=True,
            message="Todo deleted successfully",
            id=todo.id,
            affected=(TODOS, EVENTS) if event_deleted else (TODOS,),
        )
