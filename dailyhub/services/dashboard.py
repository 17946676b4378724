"""DashboardService - 今日の予定・ToDo と収支サマリー"""

from __future__ import annotations

from datetime import date

from dailyhub.domain.models import (
    CalendarEvent,
    Dashboard,
    RequestContext,
    Todo,
    Transaction,
)
from dailyhub.domain.ports import EVENTS, FINANCE, TODOS, DocumentStore
from dailyhub.services.finance import summarize
from dailyhub.services.records import list_owned
from dailyhub.services.validation import require_date


class DashboardService:
    """ダッシュボード表示用の集計"""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def build(self, ctx: RequestContext, day: str | None = None) -> Dashboard:
        """
        指定日（省略時は今日）のイベント・ToDo と、全期間の収支サマリーを返す。
        """
        day = require_date(day) if day else date.today().isoformat()
        events = self._store.query(EVENTS, {"ownerUid": ctx.uid, "date": day})
        todos = self._store.query(TODOS, {"ownerUid": ctx.uid, "date": day})
        return Dashboard(
            day=day,
            events=[CalendarEvent.from_document(i, d) for i, d in events],
            todos=[Todo.from_document(i, d) for i, d in todos],
            finance=summarize(list_owned(self._store, ctx, FINANCE, Transaction)),
        )
