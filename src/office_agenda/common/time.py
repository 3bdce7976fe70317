"""
Утилиты времени.

Назначение:
- единый источник "сейчас" (UTC и локальное)
- разбор ISO строк, которые присылает клиент (datetime-local без смещения или с ним)
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Текущее время в UTC (datetime).
    """
    return datetime.now(UTC)


def utc_ms() -> int:
    """
    Текущее время в UTC в миллисекундах (int).
    """
    return int(utc_now().timestamp() * 1000)


def local_now() -> datetime:
    """
    Текущее локальное время без tzinfo (как его видит пользователь в браузере).
    """
    return datetime.now()


def parse_iso(value: str | datetime) -> datetime:
    """
    ISO строка -> datetime.

    "Z" в конце поддерживается. Пустая строка или мусор -> ValueError.
    """
    if isinstance(value, datetime):
        return value
    raw = (value or "").strip()
    if not raw:
        raise ValueError("empty datetime")
    return datetime.fromisoformat(raw)


def to_local(value: str | datetime) -> datetime:
    """
    Приводит момент времени к локальному naive datetime.
    naive значения считаются уже локальными.
    """
    dt = parse_iso(value)
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)
