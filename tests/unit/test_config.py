"""AppConfig のユニットテスト"""

from unittest.mock import patch

import pytest
from dailyhub.config import AppConfig, cors_origins_from_env

_BASE_ENV = {"PROJECT_ID": "dailyhub-test"}


def _load(env: dict) -> AppConfig:
    with patch.dict("os.environ", env, clear=True), patch("dailyhub.config.load_dotenv"):
        return AppConfig.from_env()


class TestFromEnv:
    def test_defaults(self):
        config = _load(_BASE_ENV)

        assert config.project_id == "dailyhub-test"
        assert config.secret_tree_max_depth == 64
        assert config.local_mode is False
        assert config.has_service_account is False

    def test_missing_project_id_raises(self):
        with pytest.raises(ValueError, match="PROJECT_ID"):
            _load({})

    def test_private_key_newlines_are_expanded(self):
        config = _load(
            {
                **_BASE_ENV,
                "FIREBASE_CLIENT_EMAIL": "sa@example.com",
                "FIREBASE_PRIVATE_KEY": "line1\\nline2",
            }
        )
        assert config.firebase_private_key == "line1\nline2"
        assert config.has_service_account is True

    @pytest.mark.parametrize("value", ["zero", "0", "-3"])
    def test_invalid_max_depth_raises(self, value):
        with pytest.raises(ValueError, match="SECRET_TREE_MAX_DEPTH"):
            _load({**_BASE_ENV, "SECRET_TREE_MAX_DEPTH": value})

    def test_local_mode(self):
        assert _load({**_BASE_ENV, "LOCAL_MODE": "1"}).local_mode is True


class TestCorsOrigins:
    def test_default_is_local_origin(self):
        with patch.dict("os.environ", {}, clear=True):
            assert cors_origins_from_env() == ["http://localhost:3000"]

    def test_origins_are_split(self):
        env = {"CORS_ORIGINS": "https://a.example, https://b.example,"}
        with patch.dict("os.environ", env, clear=True):
            assert cors_origins_from_env() == ["https://a.example", "https://b.example"]
