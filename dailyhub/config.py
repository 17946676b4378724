"""設定管理 - 環境変数の型安全な読み込み"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

_DEFAULT_CORS_ORIGIN = "http://localhost:3000"


def cors_origins_from_env() -> list[str]:
    """CORS_ORIGINS（カンマ区切り）を読み込む。未設定ならローカル開発用のオリジン"""
    origins = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()
    ]
    return origins or [_DEFAULT_CORS_ORIGIN]


@dataclass(frozen=True)
class AppConfig:
    """アプリケーション設定"""

    project_id: str
    firebase_client_email: str = ""
    firebase_private_key: str = ""
    secret_tree_max_depth: int = 64
    # Firestore エミュレータ（FIRESTORE_EMULATOR_HOST）へ認証情報なしで接続する
    local_mode: bool = False

    @property
    def has_service_account(self) -> bool:
        """サービスアカウント鍵が環境変数で渡されているか"""
        return bool(self.firebase_client_email and self.firebase_private_key)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """環境変数から設定を読み込む"""
        load_dotenv()

        project_id = os.getenv("PROJECT_ID")
        if not project_id:
            raise ValueError("PROJECT_ID is not set in environment")

        # .env では改行が "\n" としてエスケープされている
        private_key = os.getenv("FIREBASE_PRIVATE_KEY", "").replace("\\n", "\n")

        max_depth_raw = os.getenv("SECRET_TREE_MAX_DEPTH", "64")
        try:
            max_depth = int(max_depth_raw)
        except ValueError as e:
            raise ValueError(
                f"SECRET_TREE_MAX_DEPTH must be an integer: {max_depth_raw!r}"
            ) from e
        if max_depth < 1:
            raise ValueError("SECRET_TREE_MAX_DEPTH must be positive")

        return cls(
            project_id=project_id,
            firebase_client_email=os.getenv("FIREBASE_CLIENT_EMAIL", ""),
            firebase_private_key=private_key,
            secret_tree_max_depth=max_depth,
            local_mode=bool(os.getenv("LOCAL_MODE")),
        )
