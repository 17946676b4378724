"""ドメインモデルの永続化スキーマ変換テスト"""

from dailyhub.domain.models import (
    CalendarEvent,
    FinanceSummary,
    SecretItem,
    Todo,
    UserProfile,
)


class TestFromDocument:
    """Firestore ドキュメントの欠損・None 値のフォールバック"""

    def test_event_defaults(self):
        event = CalendarEvent.from_document("e1", {"ownerUid": "u", "title": "x"})

        assert event.color == "blue"
        assert event.is_completed is False
        assert event.shared_with == []

    def test_todo_empty_synced_event_id_is_unsynced(self):
        todo = Todo.from_document("t1", {"ownerUid": "u", "syncedEventId": ""})

        assert todo.synced_event_id is None
        assert todo.is_synced is False

    def test_user_profile_uses_doc_id_when_uid_missing(self):
        profile = UserProfile.from_document("u1", {"email": "a@example.com"})

        assert profile.uid == "u1"
        assert profile.friends == []
        assert profile.friend_requests_received == []

    def test_secret_item_empty_parent_is_root(self):
        item = SecretItem.from_document("s1", {"type": "folder", "parentId": ""})

        assert item.parent_id is None
        assert item.is_folder is True


class TestToDocument:
    def test_todo_uses_camel_case_keys(self):
        doc = Todo("t1", "u", "Milk", "2026-03-01", synced_event_id="e1").to_document()

        assert doc["ownerUid"] == "u"
        assert doc["isCompleted"] is False
        assert doc["syncedEventId"] == "e1"

    def test_folder_document_omits_content(self):
        folder = SecretItem("s1", "u", "folder", "f", None, "2026-03-01T00:00:00+00:00")
        assert "content" not in folder.to_document()

    def test_note_document_keeps_empty_content(self):
        note = SecretItem("s1", "u", "note", "n", None, "2026-03-01T00:00:00+00:00", "")
        assert note.to_document()["content"] == ""


def test_finance_summary_balance():
    assert FinanceSummary(income=10.0, expense=25.5).balance == -15.5
