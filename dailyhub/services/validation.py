"""入力値の検証ヘルパー"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from dailyhub.domain.errors import ValidationError


def require_text(value: Any, field_name: str) -> str:
    """空でない文字列を要求する（前後の空白は除去）"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: Any, field_name: str = "date") -> str:
    """YYYY-MM-DD 形式の日付を要求する"""
    text = require_text(value, field_name)
    try:
        date.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD: {text!r}") from e
    return text


def require_choice(value: Any, choices: type[Enum], field_name: str) -> str:
    """Enum の値のいずれかであることを要求する"""
    try:
        return choices(value).value
    except ValueError as e:
        allowed = ", ".join(c.value for c in choices)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from e


def parse_amount(value: Any) -> float:
    """金額を0以上の有限な数値として解釈する"""
    if isinstance(value, bool):
        raise ValidationError("amount must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError("amount must be a number") from e
    if not math.isfinite(amount):
        raise ValidationError("amount must be a finite number")
    if amount < 0:
        raise ValidationError("amount must not be negative")
    return amount


def utc_now_iso() -> str:
    """現在時刻（UTC, ISO8601）"""
    return datetime.now(timezone.utc).isoformat()
