"""AuthorizationGuard - リクエストごとの認証・所有者チェック

2段階のチェックを行う:
  1. 呼び出し元が主張する所有者（claimed_uid）と検証済み uid の一致
  2. 既存レコードの ownerUid と検証済み uid の一致

1 はストアに触れる前に行う。
"""

from __future__ import annotations

import logging

from dailyhub.domain.errors import AuthMismatchError, UnauthorizedError
from dailyhub.domain.models import RequestContext
from dailyhub.domain.ports import IdentityVerifier

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """ID トークンを検証して RequestContext を組み立てる"""

    def __init__(self, verifier: IdentityVerifier) -> None:
        self._verifier = verifier

    def open(self, token: str, claimed_uid: str | None = None) -> RequestContext:
        """
        トークンを検証し、リクエストコンテキストを返す。

        Args:
            token: Bearer トークン
            claimed_uid: 呼び出し元が主張する所有者 uid（省略可）

        Raises:
            InvalidTokenError: トークンが無効な場合
            AuthMismatchError: claimed_uid が検証済み uid と一致しない場合
        """
        identity = self._verifier.verify(token)
        if claimed_uid and claimed_uid != identity.uid:
            logger.warning(
                "Auth mismatch: claimed=%s, verified=%s", claimed_uid, identity.uid
            )
            raise AuthMismatchError("Authenticated user does not match request owner")
        return RequestContext(
            uid=identity.uid,
            email=identity.email,
            display_name=identity.display_name,
            photo_url=identity.photo_url,
        )

    @staticmethod
    def ensure_owner(
        ctx: RequestContext, owner_uid: str, kind: str, record_id: str
    ) -> None:
        """
        レコードの所有者が検証済み uid と一致することを確認する。

        Raises:
            UnauthorizedError: 一致しない場合
        """
        if owner_uid != ctx.uid:
            logger.warning(
                "Unauthorized access: uid=%s, %s=%s, owner=%s",
                ctx.uid,
                kind,
                record_id,
                owner_uid,
            )
            raise UnauthorizedError(f"Not authorized to modify this {kind}")
