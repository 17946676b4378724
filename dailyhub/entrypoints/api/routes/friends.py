"""フレンド API ルート

GET    /api/friends                          → 200 { friends, requests_received, requests_sent }
POST   /api/friends/requests                 → 201 ActionResponse
POST   /api/friends/requests/{uid}/accept    → 200 ActionResponse
POST   /api/friends/requests/{uid}/reject    → 200 ActionResponse
DELETE /api/friends/{uid}                    → 200 ActionResponse
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from dailyhub.domain.models import RequestContext
from dailyhub.entrypoints.api.deps import get_friendship_service, get_request_context
from dailyhub.entrypoints.api.routes.profiles import UserSummary
from dailyhub.entrypoints.api.schemas import ActionResponse, to_action_response
from dailyhub.services.friends import FriendshipService

router = APIRouter(prefix="/friends", tags=["friends"])


class FriendRequestBody(BaseModel):
    email: str | None = None


class FriendsResponse(BaseModel):
    friends: list[UserSummary]
    requests_received: list[UserSummary]
    requests_sent: list[UserSummary]


@router.get("", response_model=FriendsResponse)
def get_friends(
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> FriendsResponse:
    overview = service.overview(ctx)
    return FriendsResponse(
        friends=[UserSummary.from_model(p) for p in overview.friends],
        requests_received=[UserSummary.from_model(p) for p in overview.requests_received],
        requests_sent=[UserSummary.from_model(p) for p in overview.requests_sent],
    )


@router.post(
    "/requests", status_code=status.HTTP_201_CREATED, response_model=ActionResponse
)
def send_friend_request(
    body: FriendRequestBody,
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> ActionResponse:
    """メールアドレスで指定したユーザーにフレンドリクエストを送る"""
    return to_action_response(service.send_request(ctx, body.email))


@router.post("/requests/{sender_uid}/accept", response_model=ActionResponse)
def accept_friend_request(
    sender_uid: str,
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> ActionResponse:
    return to_action_response(service.accept(ctx, sender_uid))


@router.post("/requests/{sender_uid}/reject", response_model=ActionResponse)
def reject_friend_request(
    sender_uid: str,
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> ActionResponse:
    return to_action_response(service.reject(ctx, sender_uid))


@router.delete("/{friend_uid}", response_model=ActionResponse)
def remove_friend(
    friend_uid: str,
    ctx: RequestContext = Depends(get_request_context),
    service: FriendshipService = Depends(get_friendship_service),
) -> ActionResponse:
    return to_action_response(service.remove(ctx, friend_uid))
