"""E2E: 実 Firestore（Emulator）での主要フロー

ToDo ⇔ イベント連携・フォルダ再帰削除・フレンドリクエストを
バッチ書き込みを含めて通しで確認する。
"""

import pytest

pytestmark = pytest.mark.e2e

ALICE = {"Authorization": "Bearer alice"}
BOB = {"Authorization": "Bearer bob"}


class TestTodoEventLink:
    def test_synced_todo_lifecycle(self, e2e_client, firestore_client):
        # Arrange / Act: 連携付きで作成
        todo_id = e2e_client.post(
            "/api/todos",
            json={"text": "Buy milk", "date": "2026-03-01", "sync": True},
            headers=ALICE,
        ).json()["id"]

        todo = firestore_client.collection("todos").document(todo_id).get().to_dict()
        event_id = todo["syncedEventId"]
        event = firestore_client.collection("events").document(event_id).get()
        assert event.exists
        assert event.to_dict()["title"] == "[Todo] Buy milk"

        # 完了状態の伝播
        e2e_client.post(f"/api/todos/{todo_id}/toggle", headers=ALICE)
        event = firestore_client.collection("events").document(event_id).get()
        assert event.to_dict()["isCompleted"] is True

        # イベント削除で ToDo も削除
        response = e2e_client.delete(f"/api/events/{event_id}", headers=ALICE)
        assert response.json()["affected"] == ["events", "todos"]
        assert not firestore_client.collection("todos").document(todo_id).get().exists

    def test_other_user_cannot_toggle(self, e2e_client):
        todo_id = e2e_client.post(
            "/api/todos", json={"text": "A", "date": "2026-03-01"}, headers=ALICE
        ).json()["id"]

        response = e2e_client.post(f"/api/todos/{todo_id}/toggle", headers=BOB)

        assert response.status_code == 403


class TestSecretTree:
    def test_recursive_delete(self, e2e_client, firestore_client):
        root = e2e_client.post(
            "/api/secret-items", json={"type": "folder", "name": "root"}, headers=ALICE
        ).json()["id"]
        sub = e2e_client.post(
            "/api/secret-items",
            json={"type": "folder", "name": "sub", "parent_id": root},
            headers=ALICE,
        ).json()["id"]
        e2e_client.post(
            "/api/secret-items",
            json={"type": "note", "name": "n", "parent_id": sub},
            headers=ALICE,
        )

        response = e2e_client.delete(f"/api/secret-items/{root}", headers=ALICE)

        assert response.json()["message"] == "Deleted 3 item(s)"
        assert list(firestore_client.collection("secretItems").stream()) == []


class TestFriends:
    def test_request_and_accept(self, e2e_client, firestore_client):
        e2e_client.get("/api/profile", headers=ALICE)
        e2e_client.get("/api/profile", headers=BOB)

        e2e_client.post(
            "/api/friends/requests", json={"email": "bob@example.com"}, headers=ALICE
        )
        e2e_client.post("/api/friends/requests/alice/accept", headers=BOB)

        alice = firestore_client.collection("users").document("alice").get().to_dict()
        bob = firestore_client.collection("users").document("bob").get().to_dict()
        assert alice["friends"] == ["bob"]
        assert bob["friends"] == ["alice"]
        assert alice["friendRequestsSent"] == []
        assert bob["friendRequestsReceived"] == []
