"""logging_config モジュールのテスト"""

import json
import logging
import sys
from unittest.mock import patch

from dailyhub.logging_config import CloudLoggingFormatter, setup_logging


def _make_record(
    message: str = "test message",
    level: int = logging.INFO,
    exc_info=None,
) -> logging.LogRecord:
    """テスト用の LogRecord を生成するヘルパー"""
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="",
        lineno=0,
        msg=message,
        args=(),
        exc_info=exc_info,
    )


class TestCloudLoggingFormatter:
    """CloudLoggingFormatter の単体テスト"""

    def test_format_returns_valid_json(self):
        """フォーマット結果が有効なJSONであること"""
        output = CloudLoggingFormatter().format(_make_record("hello world"))

        parsed = json.loads(output)
        assert parsed["message"] == "hello world"

    def test_severity_mapping(self):
        """ログレベルが severity にマッピングされること"""
        formatter = CloudLoggingFormatter()
        for level, severity in [
            (logging.DEBUG, "DEBUG"),
            (logging.INFO, "INFO"),
            (logging.WARNING, "WARNING"),
            (logging.ERROR, "ERROR"),
            (logging.CRITICAL, "CRITICAL"),
        ]:
            parsed = json.loads(formatter.format(_make_record(level=level)))
            assert parsed["severity"] == severity

    def test_required_fields_present(self):
        """必須フィールド (severity, message, logger, timestamp) が含まれること"""
        parsed = json.loads(CloudLoggingFormatter().format(_make_record()))

        assert {"severity", "message", "logger", "timestamp"} <= set(parsed)

    def test_exception_info_included(self):
        """例外情報が exception フィールドとして含まれること"""
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        parsed = json.loads(CloudLoggingFormatter().format(_make_record(exc_info=exc_info)))

        assert "ValueError" in parsed["exception"]
        assert "test error" in parsed["exception"]

    def test_no_exception_field_when_no_exception(self):
        parsed = json.loads(CloudLoggingFormatter().format(_make_record()))
        assert "exception" not in parsed

    def test_extra_fields_are_merged(self):
        """extra_fields が JSON に展開され、予約フィールドは上書きされないこと"""
        record = _make_record("Todo synced")
        record.extra_fields = {"uid": "u1", "message": "overwritten?"}

        parsed = json.loads(CloudLoggingFormatter().format(record))

        assert parsed["uid"] == "u1"
        assert parsed["message"] == "Todo synced"

    def test_japanese_message_encoded_correctly(self):
        """日本語メッセージが正しくエンコードされること"""
        output = CloudLoggingFormatter().format(_make_record("ToDo を作成しました"))

        # ensure_ascii=False なので日本語がそのまま含まれる
        assert "ToDo を作成しました" in output


class TestSetupLogging:
    """setup_logging() の動作テスト"""

    def test_uses_json_formatter_in_k_service_env(self):
        """K_SERVICE 環境変数がある場合、JSON フォーマッタが使われること"""
        with patch.dict("os.environ", {"K_SERVICE": "dailyhub-api"}, clear=True):
            setup_logging()

        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, CloudLoggingFormatter)

    def test_uses_text_formatter_in_local_env(self):
        """Cloud Run 環境変数がない場合、テキスト フォーマッタが使われること"""
        with patch.dict("os.environ", {}, clear=True):
            setup_logging()

        root_logger = logging.getLogger()
        assert not isinstance(root_logger.handlers[0].formatter, CloudLoggingFormatter)

    def test_log_format_overrides_environment(self):
        """LOG_FORMAT=text は Cloud Run 上でもテキスト形式にすること"""
        with patch.dict(
            "os.environ", {"K_SERVICE": "dailyhub-api", "LOG_FORMAT": "text"}, clear=True
        ):
            setup_logging()

        root_logger = logging.getLogger()
        assert not isinstance(root_logger.handlers[0].formatter, CloudLoggingFormatter)

    def test_log_level_respected(self):
        """LOG_LEVEL 環境変数が反映されること"""
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}, clear=False):
            setup_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_noisy_client_loggers_are_capped(self):
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}, clear=False):
            setup_logging()

        assert logging.getLogger("google").level == logging.WARNING
        assert logging.getLogger("firebase_admin").level == logging.WARNING

    def test_handlers_cleared_on_reinitialize(self):
        """setup_logging() を複数回呼んでもハンドラが重複しないこと"""
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1
