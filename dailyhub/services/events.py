"""EventService - カレンダーイベントの CRUD"""

from __future__ import annotations

import logging
from typing import Any

from dailyhub.domain.errors import ValidationError
from dailyhub.domain.models import (
    ActionResult,
    CalendarEvent,
    EventColor,
    RequestContext,
)
from dailyhub.domain.ports import EVENTS, TODOS, DocumentStore
from dailyhub.services.records import list_owned, load_owned
from dailyhub.services.todo_event_link import TodoEventLinker
from dailyhub.services.validation import require_choice, require_date, require_text

logger = logging.getLogger(__name__)

# 更新可能なフィールド: 入力キー → 永続化キー
_UPDATABLE = {
    "title": "title",
    "date": "date",
    "description": "description",
    "color": "color",
    "is_completed": "isCompleted",
}


class EventService:
    """所有者スコープのカレンダーイベント操作"""

    def __init__(self, store: DocumentStore, linker: TodoEventLinker) -> None:
        self._store = store
        self._linker = linker

    def list(self, ctx: RequestContext) -> list[CalendarEvent]:
        """自分のイベント一覧を日付順で返す"""
        events = list_owned(self._store, ctx, EVENTS, CalendarEvent)
        return sorted(events, key=lambda e: e.date)

    def get(self, ctx: RequestContext, event_id: str) -> CalendarEvent:
        return load_owned(self._store, ctx, EVENTS, event_id, CalendarEvent, "event")

    def create(
        self,
        ctx: RequestContext,
        title: Any,
        date: Any,
        description: Any = "",
        color: Any = None,
    ) -> ActionResult:
        """イベントを作成する。ownerUid は常に検証済み uid"""
        event = CalendarEvent(
            id=self._store.new_id(EVENTS),
            owner_uid=ctx.uid,
            title=require_text(title, "title"),
            date=require_date(date),
            description=description or "",
            color=require_choice(color or EventColor.BLUE.value, EventColor, "color"),
        )
        self._store.insert(EVENTS, event.to_document(), doc_id=event.id)
        logger.info("Event created: uid=%s, event_id=%s", ctx.uid, event.id)
        return ActionResult(
            success=True,
            message="Event added successfully",
            id=event.id,
            affected=(EVENTS,),
        )

    def update(
        self, ctx: RequestContext, event_id: str, changes: dict[str, Any]
    ) -> ActionResult:
        """
        イベントを部分更新する。

        連携中の ToDo には反映しない（伝播は ToDo → イベントの一方向）。
        """
        fields = self._validate_changes(changes)
        event = self.get(ctx, event_id)
        fields["ownerUid"] = ctx.uid
        self._store.update(EVENTS, event.id, fields)
        logger.info(
            "Event updated: uid=%s, event_id=%s, fields=%s",
            ctx.uid,
            event.id,
            sorted(fields),
        )
        return ActionResult(
            success=True,
            message="Event updated successfully",
            id=event.id,
            affected=(EVENTS,),
        )

    def delete(self, ctx: RequestContext, event_id: str) -> ActionResult:
        """イベントを削除する。連携している ToDo も削除される"""
        event = self.get(ctx, event_id)
        removed_todos = self._linker.delete_event(ctx, event)
        affected = (EVENTS, TODOS) if removed_todos else (EVENTS,)
        return ActionResult(
            success=True,
            message="Event deleted successfully",
            id=event.id,
            affected=affected,
        )

    @staticmethod
    def _validate_changes(changes: dict[str, Any]) -> dict[str, Any]:
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No fields to update")

        fields: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "title":
                value = require_text(value, "title")
            elif key == "date":
                value = require_date(value)
            elif key == "color":
                value = require_choice(value, EventColor, "color")
            elif key == "description":
                value = value or ""
            elif key == "is_completed":
                if not isinstance(value, bool):
                    raise ValidationError("is_completed must be a boolean")
            fields[_UPDATABLE[key]] = value
        return fields
