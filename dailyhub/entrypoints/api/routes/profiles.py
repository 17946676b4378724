"""ユーザープロファイル API ルート

GET /api/profile                → 200 UserProfile（初回アクセス時に作成）
GET /api/users/search?email=    → 200 [UserSummary...]
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dailyhub.domain.models import RequestContext, UserProfile
from dailyhub.entrypoints.api.deps import get_friendship_service, get_request_context
from dailyhub.services.friends import FriendshipService

router = APIRouter(tags=["profiles"])


class UserSummary(BaseModel):
    """他ユーザーに見せてよい項目のみ"""

    uid: str
    email: str
    display_name: str
    photo_url: str

    @classmethod
    def from_model(cls, p: UserProfile) -> UserSummary:
        return cls(
            uid=p.uid,
            email=p.email,
            display_name=p.display_name,
            photo_url=p.photo_url,
        )


class ProfileResponse(UserSummary):
    friends: list[str]
    friend_requests_sent: list[str]
    friend_requests_received: list[str]

    @classmethod
    def from_model(cls, p: UserProfile) -> ProfileResponse:
        return cls(
            uid=p.uid,
            email=p.email,
            display_name=p.display_name,
            photo_url=p.photo_url,
            friends=p.friends,
            friend_requests_sent=p.friend_requests_sent,
            friend_requests_received=p.friend_requests_received,
        )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> ProfileResponse:
    """自分のプロファイルを返す"""
    return ProfileResponse.from_model(service.get_or_create_profile(ctx))


@router.get("/users/search", response_model=list[UserSummary])
def search_users(
    email: str = "",
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> list[UserSummary]:
    """メールアドレスの完全一致でユーザーを検索する"""
    return [UserSummary.from_model(p) for p in service.search_by_email(ctx, email)]
