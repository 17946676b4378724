"""FriendshipService - ユーザープロファイルとフレンド関係

フレンド関係は独立したエッジとしては持たず、両ユーザーの users/{uid} に
friends / friendRequestsSent / friendRequestsReceived として二重に埋め込む。
両側の配列は常に1つの WriteBatch で更新し、片側だけ変わった状態を残さない。
"""

from __future__ import annotations

import logging

from dailyhub.domain.errors import (
    AlreadyFriendsError,
    DuplicateRequestError,
    NotFoundError,
    ValidationError,
)
from dailyhub.domain.models import (
    ActionResult,
    FriendsOverview,
    RequestContext,
    UserProfile,
)
from dailyhub.domain.ports import USERS, ArrayRemove, ArrayUnion, DocumentStore
from dailyhub.services.validation import require_text

logger = logging.getLogger(__name__)


class FriendshipService:
    """プロファイルの取得・検索とフレンドリクエストの送受信"""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # ── プロファイル ──────────────────────────────────────────────────────────

    def get_or_create_profile(self, ctx: RequestContext) -> UserProfile:
        """自分のプロファイルを返す。初回は認証情報から作成する"""
        data = self._store.get(USERS, ctx.uid)
        if data is not None:
            return UserProfile.from_document(ctx.uid, data)

        profile = UserProfile(
            uid=ctx.uid,
            email=ctx.email,
            display_name=ctx.display_name,
            photo_url=ctx.photo_url,
        )
        self._store.insert(USERS, profile.to_document(), doc_id=ctx.uid)
        logger.info("Profile created: uid=%s", ctx.uid)
        return profile

    def search_by_email(self, ctx: RequestContext, email: str) -> list[UserProfile]:
        """メールアドレスの完全一致でユーザーを検索する"""
        email = require_text(email, "email")
        return [
            UserProfile.from_document(doc_id, data)
            for doc_id, data in self._store.query(USERS, {"email": email})
        ]

    def overview(self, ctx: RequestContext) -> FriendsOverview:
        """フレンド・受信リクエスト・送信リクエストのプロファイル一覧"""
        me = self.get_or_create_profile(ctx)
        return FriendsOverview(
            friends=self._profiles(me.friends),
            requests_received=self._profiles(me.friend_requests_received),
            requests_sent=self._profiles(me.friend_requests_sent),
        )

    # ── フレンドリクエスト ─────────────────────────────────────────────────────

    def send_request(self, ctx: RequestContext, receiver_email: str) -> ActionResult:
        """
        メールアドレスで指定したユーザーへフレンドリクエストを送る。

        同じメールアドレスのユーザーが複数いる場合は最初の1件を使う。

        Raises:
            NotFoundError: 該当ユーザーがいない場合
            ValidationError: 自分自身へのリクエストの場合
            AlreadyFriendsError: 既にフレンドの場合
            DuplicateRequestError: 送信済み、または相手から受信済みの場合
        """
        receiver_email = require_text(receiver_email, "email")
        sender = self.get_or_create_profile(ctx)

        matches = self._store.query(USERS, {"email": receiver_email}, limit=1)
        if not matches:
            raise NotFoundError(f'User with email "{receiver_email}" not found')
        receiver = UserProfile.from_document(*matches[0])

        if receiver.uid == sender.uid:
            raise ValidationError("You cannot send a friend request to yourself")
        if receiver.uid in sender.friends:
            raise AlreadyFriendsError("You are already friends with this user")
        if receiver.uid in sender.friend_requests_sent:
            raise DuplicateRequestError("Friend request already sent")
        if receiver.uid in sender.friend_requests_received:
            raise DuplicateRequestError(
                "This user has already sent you a request; accept it instead"
            )

        batch = self._store.batch()
        batch.update(
            USERS, sender.uid, {"friendRequestsSent": ArrayUnion((receiver.uid,))}
        )
        batch.update(
            USERS, receiver.uid, {"friendRequestsReceived": ArrayUnion((sender.uid,))}
        )
        batch.commit()
        logger.info("Friend request sent: from=%s, to=%s", sender.uid, receiver.uid)
        return ActionResult(
            success=True,
            message=f"Friend request sent to {receiver_email}",
            id=receiver.uid,
            affected=(USERS,),
        )

    def accept(self, ctx: RequestContext, sender_uid: str) -> ActionResult:
        """受信したリクエストを承認し、双方の friends に追加する"""
        me = self._pending_from(ctx, sender_uid)
        self._profile(sender_uid)

        batch = self._store.batch()
        batch.update(
            USERS,
            me.uid,
            {
                "friends": ArrayUnion((sender_uid,)),
                "friendRequestsReceived": ArrayRemove((sender_uid,)),
            },
        )
        batch.update(
            USERS,
            sender_uid,
            {
                "friends": ArrayUnion((me.uid,)),
                "friendRequestsSent": ArrayRemove((me.uid,)),
            },
        )
        batch.commit()
        logger.info("Friend request accepted: uid=%s, sender=%s", me.uid, sender_uid)
        return ActionResult(
            success=True,
            message="Friend request accepted",
            id=sender_uid,
            affected=(USERS,),
        )

    def reject(self, ctx: RequestContext, sender_uid: str) -> ActionResult:
        """受信したリクエストを拒否し、双方の保留リストから取り除く"""
        me = self._pending_from(ctx, sender_uid)

        batch = self._store.batch()
        batch.update(
            USERS, me.uid, {"friendRequestsReceived": ArrayRemove((sender_uid,))}
        )
        if self._store.get(USERS, sender_uid) is not None:
            batch.update(
                USERS, sender_uid, {"friendRequestsSent": ArrayRemove((me.uid,))}
            )
        batch.commit()
        logger.info("Friend request rejected: uid=%s, sender=%s", me.uid, sender_uid)
        return ActionResult(
            success=True,
            message="Friend request rejected",
            id=sender_uid,
            affected=(USERS,),
        )

    def remove(self, ctx: RequestContext, friend_uid: str) -> ActionResult:
        """フレンドを解除し、双方の friends から取り除く"""
        me = self.get_or_create_profile(ctx)
        if friend_uid not in me.friends:
            raise NotFoundError("This user is not in your friends list")

        batch = self._store.batch()
        batch.update(USERS, me.uid, {"friends": ArrayRemove((friend_uid,))})
        if self._store.get(USERS, friend_uid) is not None:
            batch.update(USERS, friend_uid, {"friends": ArrayRemove((me.uid,))})
        batch.commit()
        logger.info("Friend removed: uid=%s, friend=%s", me.uid, friend_uid)
        return ActionResult(
            success=True,
            message="Friend removed",
            id=friend_uid,
            affected=(USERS,),
        )

    # ── ヘルパー ───────────────────────────────────────────────────────────────

    def _pending_from(self, ctx: RequestContext, sender_uid: str) -> UserProfile:
        me = self.get_or_create_profile(ctx)
        if sender_uid not in me.friend_requests_received:
            raise NotFoundError("No pending friend request from this user")
        return me

    def _profile(self, uid: str) -> UserProfile:
        data = self._store.get(USERS, uid)
        if data is None:
            raise NotFoundError("User not found")
        return UserProfile.from_document(uid, data)

    def _profiles(self, uids: list[str]) -> list[UserProfile]:
        profiles = []
        for uid in uids:
            data = self._store.get(USERS, uid)
            if data is None:
                logger.warning("Profile referenced but missing: uid=%s", uid)
                continue
            profiles.append(UserProfile.from_document(uid, data))
        return profiles
