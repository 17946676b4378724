"""ドメイン固有の例外クラス

各例外は安定したエラーコード（code）を持ち、API 層で
{"success": false, "message": ..., "error": code} に変換される。
"""

from __future__ import annotations


class DailyHubError(Exception):
    """DailyHub の基底例外"""

    code = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidTokenError(DailyHubError):
    """ID トークンが無い・無効・期限切れ"""

    code = "InvalidToken"


class AuthMismatchError(DailyHubError):
    """呼び出し元が主張する所有者と、検証済みの uid が一致しない"""

    code = "AuthMismatch"


class UnauthorizedError(DailyHubError):
    """レコードの所有者と検証済みの uid が一致しない"""

    code = "Unauthorized"


class NotFoundError(DailyHubError):
    """ID に対応するレコードが存在しない"""

    code = "NotFound"


class ValidationError(DailyHubError):
    """必須フィールドの欠落・不正な値"""

    code = "ValidationError"


class CycleError(ValidationError):
    """フォルダツリーの親子関係が循環する（または深さ上限を超える）"""

    code = "CycleError"


class AlreadySyncedError(DailyHubError):
    """ToDo が既にカレンダーイベントと連携済み"""

    code = "AlreadySynced"


class NotSyncedError(DailyHubError):
    """ToDo がカレンダーイベントと連携していない"""

    code = "NotSynced"


class AlreadyFriendsError(DailyHubError):
    """既にフレンド同士"""

    code = "AlreadyFriends"


class DuplicateRequestError(DailyHubError):
    """フレンドリクエストが既に送信済み・受信済み"""

    code = "DuplicateRequest"


class StoreError(DailyHubError):
    """ドキュメントストアの呼び出し失敗（上流のメッセージをそのまま渡す）"""

    code = "StoreError"
