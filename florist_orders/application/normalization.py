from datetime import datetime, timezone
from typing import Optional
from pydantic import TypeAdapter, ValidationError

from florist_orders.domain.exceptions import InvalidTimestampError


# Максимальные длины текстовых полей заказа
ID_MAX = 64
BUYER_NAME_MAX = 120
PHONE_MAX = 40
ADDRESS_MAX = 500
PRODUCT_NAME_MAX = 200
LABEL_MAX = 32
TIMESTAMP_MAX = 40
SEARCH_MAX = 120

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 500

_datetime_adapter = TypeAdapter(datetime)


def normalize(value, max_len: int) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_len]


def parse_timestamp(raw: str, field: str = "delivery_at") -> Optional[datetime]:
    """Пустая строка — None, некорректная — InvalidTimestampError.

    Время без часового пояса считается UTC, результат всегда приводится к UTC.
    Число секунд (unix time) не принимается.
    """
    value = normalize(raw, TIMESTAMP_MAX)
    if not value:
        return None
    if _looks_numeric(value):
        raise InvalidTimestampError(field, value)
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        raise InvalidTimestampError(field, value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _looks_numeric(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def clamp_limit(raw) -> int:
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_LIST_LIMIT
    return min(max(limit, 1), MAX_LIST_LIMIT)


def escape_like(value: str, escape: str = "\\") -> str:
    """Экранирует спецсимволы LIKE, чтобы поиск был по буквальной подстроке"""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )
