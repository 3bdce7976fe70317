"""
Проверки расписания переговорных.

Назначение:
- порядок времени начала/окончания
- рабочие часы
- пересечение с уже стоящими встречами комнаты

Все функции чистые: без I/O и без обращения к хранилищу.
Интервалы полуоткрытые [start, end): встречи "стык в стык" не пересекаются.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from office_agenda.common.time import to_local

from .enums import ScheduleViolation
from .models import Meeting

BUSINESS_HOURS_START = 8
BUSINESS_HOURS_END = 18
SLOT_MINUTES = 30

TimeLike = str | datetime


# =============================================================================
# БАЗОВЫЕ ПРОВЕРКИ
# =============================================================================
def times_ordered(start: TimeLike, end: TimeLike) -> bool:
    return to_local(start) < to_local(end)


def within_business_hours(
    start: TimeLike,
    end: TimeLike,
    *,
    first_hour: int = BUSINESS_HOURS_START,
    last_hour: int = BUSINESS_HOURS_END,
) -> bool:
    """
    Час начала и час окончания (локальные) лежат в [first_hour, last_hour].
    Проверяется только час: 18:45 проходит.
    """
    start_hour = to_local(start).hour
    end_hour = to_local(end).hour
    return first_hour <= start_hour <= last_hour and first_hour <= end_hour <= last_hour


def _meeting_bounds(meeting: Meeting) -> tuple[datetime, datetime] | None:
    try:
        return to_local(meeting.start_time), to_local(meeting.end_time)
    except ValueError:
        return None


def overlaps(meetings: Iterable[Meeting], start: TimeLike, end: TimeLike) -> bool:
    """
    True, если кандидат [start, end) пересекается хотя бы с одной встречей.
    Встречи с нечитаемым временем пропускаются.
    """
    new_start = to_local(start)
    new_end = to_local(end)
    for existing in meetings:
        bounds = _meeting_bounds(existing)
        if bounds is None:
            continue
        existing_start, existing_end = bounds
        if new_start < existing_end and new_end > existing_start:
            return True
    return False


def check_meeting(
    meetings: Iterable[Meeting],
    start: TimeLike,
    end: TimeLike,
    *,
    first_hour: int = BUSINESS_HOURS_START,
    last_hour: int = BUSINESS_HOURS_END,
) -> list[ScheduleViolation]:
    """
    Полная проверка кандидата. Пустой список = встречу можно ставить.

    Пересечение проверяется только для упорядоченных времён.
    Нечитаемое время -> ValueError.
    """
    violations: list[ScheduleViolation] = []
    ordered = times_ordered(start, end)
    if not ordered:
        violations.append(ScheduleViolation.times_not_ordered)
    if not within_business_hours(start, end, first_hour=first_hour, last_hour=last_hour):
        violations.append(ScheduleViolation.outside_business_hours)
    if ordered and overlaps(meetings, start, end):
        violations.append(ScheduleViolation.overlap)
    return violations


# =============================================================================
# СЕТКА РАСПИСАНИЯ
# =============================================================================
def time_slots(
    *,
    first_hour: int = BUSINESS_HOURS_START,
    last_hour: int = BUSINESS_HOURS_END,
    step_minutes: int = SLOT_MINUTES,
) -> list[str]:
    """08:00, 08:30 ... 17:30, 18:00"""
    slots: list[str] = []
    cursor = datetime.combine(date.min, time(hour=first_hour))
    last = datetime.combine(date.min, time(hour=last_hour))
    while cursor <= last:
        slots.append(cursor.strftime("%H:%M"))
        cursor += timedelta(minutes=step_minutes)
    return slots


def meetings_on_date(meetings: Iterable[Meeting], day: date) -> list[Meeting]:
    out: list[Meeting] = []
    for m in meetings:
        bounds = _meeting_bounds(m)
        if bounds is not None and bounds[0].date() == day:
            out.append(m)
    return out


@dataclass
class TimelinePosition:
    left_pct: float
    width_pct: float


def timeline_position(
    meeting: Meeting,
    *,
    first_hour: int = BUSINESS_HOURS_START,
    last_hour: int = BUSINESS_HOURS_END,
) -> TimelinePosition | None:
    """
    Положение встречи на полосе first_hour..last_hour в процентах.
    left не меньше 0, width не больше 100.
    """
    bounds = _meeting_bounds(meeting)
    if bounds is None:
        return None
    start, end = bounds
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    total_minutes = (last_hour - first_hour) * 60
    left = (start_minutes - first_hour * 60) * 100 / total_minutes
    width = (end_minutes - start_minutes) * 100 / total_minutes
    return TimelinePosition(left_pct=max(0.0, left), width_pct=min(100.0, width))
