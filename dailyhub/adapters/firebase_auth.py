"""Firebase Auth IdentityVerifier Adapter

Firebase Admin SDK で ID トークンを検証する。
Firebase Admin アプリの初期化もここでプロセス内1回だけ行う。
"""

from __future__ import annotations

import logging

import firebase_admin
import firebase_admin.auth as fb_auth
from firebase_admin import credentials as fb_creds

from dailyhub.config import AppConfig
from dailyhub.domain.errors import InvalidTokenError
from dailyhub.domain.models import VerifiedIdentity
from dailyhub.domain.ports import IdentityVerifier

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_credential(config: AppConfig) -> fb_creds.Base:
    """
    Firebase Admin 用の認証情報を組み立てる。

    FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY が揃っていればサービスアカウント鍵、
    なければ Application Default Credentials を使う。
    """
    if config.has_service_account:
        return fb_creds.Certificate(
            {
                "type": "service_account",
                "project_id": config.project_id,
                "client_email": config.firebase_client_email,
                "private_key": config.firebase_private_key,
                "token_uri": _TOKEN_URI,
            }
        )
    return fb_creds.ApplicationDefault()


def get_firebase_app(config: AppConfig) -> firebase_admin.App:
    """Firebase Admin アプリを返す（未初期化なら初期化する）"""
    try:
        return firebase_admin.get_app()
    except ValueError:
        app = firebase_admin.initialize_app(
            build_credential(config),
            options={"projectId": config.project_id},
        )
        logger.info("Firebase Admin initialized: project=%s", config.project_id)
        return app


class FirebaseIdentityVerifier(IdentityVerifier):
    """Firebase Auth の ID トークンを検証する"""

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        self._app = app

    def verify(self, token: str) -> VerifiedIdentity:
        """
        ID トークンを検証する。

        Raises:
            InvalidTokenError: トークンが空・無効・期限切れの場合
        """
        if not token:
            raise InvalidTokenError("Missing ID token")
        try:
            decoded = fb_auth.verify_id_token(token, app=self._app)
        except Exception as e:
            logger.warning("Invalid Firebase ID token: %s", e)
            raise InvalidTokenError("Invalid or expired ID token") from e

        return VerifiedIdentity(
            uid=decoded["uid"],
            email=decoded.get("email", ""),
            display_name=decoded.get("name", ""),
            photo_url=decoded.get("picture", ""),
        )
