"""
Генерация идентификаторов.

Назначение:
- meeting_id: m-<epoch ms>
- visitor_id / participant_id: <epoch ms>

Идентификаторы основаны на времени. Если в одну миллисекунду уже выдан такой же id,
значение сдвигается на +1 до первого свободного (taken передаётся вызывающим).
"""

from __future__ import annotations

from collections.abc import Iterable

from .time import utc_ms


def _next_free(base: int, prefix: str, taken: set[str]) -> str:
    value = base
    while f"{prefix}{value}" in taken:
        value += 1
    return f"{prefix}{value}"


def new_meeting_id(taken: Iterable[str] = ()) -> str:
    """Идентификатор встречи, уникальный среди taken."""
    return _next_free(utc_ms(), "m-", set(taken))


def new_visitor_id(taken: Iterable[str] = ()) -> str:
    """Идентификатор посетителя, уникальный среди taken."""
    return _next_free(utc_ms(), "", set(taken))


def new_participant_id(taken: Iterable[str] = ()) -> str:
    return _next_free(utc_ms(), "", set(taken))


def legacy_meeting_id(room_id: str) -> str:
    """Идентификатор встречи, синтезированной из старого формата комнаты."""
    return f"m-{room_id}-legacy"
