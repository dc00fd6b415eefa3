"""
Planning suggestions — match recurring availability against a requested slot.

A candidate must be available for the whole requested span on that weekday.
Preferred employees narrow the list only when at least one of them qualifies;
otherwise everyone who qualifies is suggested. A requested location is a soft
preference: matching windows rank first, the rest stay eligible. Within a
group, the employee with the fewest tasks due that day comes first.

Everything here is pure: the caller loads employees, windows and task counts.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterable, Mapping, Optional, Protocol

from taskee.errors import InvalidWindow


class EmployeeLike(Protocol):
    user_id: uuid.UUID


class WindowLike(Protocol):
    user_id: uuid.UUID
    weekday: int
    start_time: time
    end_time: time
    location: Optional[str]


@dataclass(frozen=True)
class PlanningRequest:
    date: date
    start_time: time
    end_time: time
    preferred_user_ids: frozenset = field(default_factory=frozenset)
    location: Optional[str] = None


@dataclass(frozen=True)
class PlanningSuggestion:
    employee: EmployeeLike
    available_from: time
    available_until: time
    location: Optional[str]
    assigned_tasks_that_day: int
    location_matches: bool


def weekday_index(d: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return d.isoweekday() % 7


def _normalize_location(value: Optional[str]) -> str:
    return (value or "").strip().casefold()


def _covers(window: WindowLike, start: time, end: time) -> bool:
    return window.start_time <= start and window.end_time >= end


def suggest(
    request: PlanningRequest,
    employees: Iterable[EmployeeLike],
    availability: Iterable[WindowLike],
    same_day_task_counts: Mapping[uuid.UUID, int],
) -> list[PlanningSuggestion]:
    if request.start_time >= request.end_time:
        raise InvalidWindow()

    by_id = {e.user_id: e for e in employees}
    weekday = weekday_index(request.date)
    wanted_location = _normalize_location(request.location)

    # one window per employee: location match first, then earliest start
    best: dict[uuid.UUID, tuple[tuple[bool, time], bool, WindowLike]] = {}
    for window in availability:
        if window.user_id not in by_id or window.weekday != weekday:
            continue
        if not _covers(window, request.start_time, request.end_time):
            continue
        matches = bool(wanted_location) and _normalize_location(window.location) == wanted_location
        rank = (not matches, window.start_time)
        current = best.get(window.user_id)
        if current is None or rank < current[0]:
            best[window.user_id] = (rank, matches, window)

    candidates = set(best)
    preferred = candidates & set(request.preferred_user_ids or ())
    if preferred:
        candidates = preferred

    suggestions = []
    for user_id in candidates:
        _, matches, window = best[user_id]
        suggestions.append(PlanningSuggestion(
            employee=by_id[user_id],
            available_from=window.start_time,
            available_until=window.end_time,
            location=window.location,
            assigned_tasks_that_day=int(same_day_task_counts.get(user_id, 0)),
            location_matches=matches,
        ))
    suggestions.sort(key=lambda s: (not s.location_matches, s.assigned_tasks_that_day, str(s.employee.user_id)))
    return suggestions
