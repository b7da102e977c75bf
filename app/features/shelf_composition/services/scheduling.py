"""
Time-gated enablement shared by shelves, videos, news and live streams.

An entity has a manual ``enabled`` flag and an optional ``schedule_date``.
While the schedule date is in the future the entity is forced off and the
flag cannot be switched on; once the date has elapsed (or when there is
none) the flag alone decides visibility.

``now`` is always passed in. Callers obtain it from a ``Clock``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol, TypeVar

from app.features.shelf_composition.domain.models import Rejection
from app.infrastructure.observability.logging import get_logger, log_rejection

logger = get_logger(__name__)

PENDING_HINT = "Shelf with future schedule date is automatically disabled"
ELAPSED_HINT = "Schedule date has passed - you can enable manually"
MANUAL_HINT = "Toggle to enable or disable manually"


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class Schedulable(Protocol):
    @property
    def enabled(self) -> bool: ...

    @property
    def schedule_date(self) -> datetime | None: ...


S = TypeVar("S")


class ScheduleState(str, Enum):
    MANUAL_ON = "MANUAL_ON"
    MANUAL_OFF = "MANUAL_OFF"
    SCHEDULED_PENDING = "SCHEDULED_PENDING"
    SCHEDULED_ELAPSED = "SCHEDULED_ELAPSED"


@dataclass(slots=True, frozen=True)
class ScheduleStatus:
    state: ScheduleState
    effective_enabled: bool
    editable: bool
    hint: str


@dataclass(slots=True, frozen=True)
class ToggleResult:
    entity: object
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _is_pending(schedule_date: datetime | None, now: datetime) -> bool:
    return schedule_date is not None and _as_utc(schedule_date) > _as_utc(now)


def effective_enabled(enabled: bool, schedule_date: datetime | None, now: datetime) -> bool:
    if _is_pending(schedule_date, now):
        return False
    return enabled


def is_editable(schedule_date: datetime | None, now: datetime) -> bool:
    return not _is_pending(schedule_date, now)


def schedule_state(enabled: bool, schedule_date: datetime | None, now: datetime) -> ScheduleState:
    if schedule_date is None:
        return ScheduleState.MANUAL_ON if enabled else ScheduleState.MANUAL_OFF
    if _is_pending(schedule_date, now):
        return ScheduleState.SCHEDULED_PENDING
    return ScheduleState.SCHEDULED_ELAPSED


def evaluate(entity: Schedulable, now: datetime) -> ScheduleStatus:
    """Full gate status for any schedulable entity."""
    state = schedule_state(entity.enabled, entity.schedule_date, now)
    if state is ScheduleState.SCHEDULED_PENDING:
        hint = PENDING_HINT
    elif state is ScheduleState.SCHEDULED_ELAPSED:
        hint = ELAPSED_HINT
    else:
        hint = MANUAL_HINT

    return ScheduleStatus(
        state=state,
        effective_enabled=effective_enabled(entity.enabled, entity.schedule_date, now),
        editable=state is not ScheduleState.SCHEDULED_PENDING,
        hint=hint,
    )


def set_enabled(entity: S, value: bool, now: datetime) -> ToggleResult:
    """
    Apply a manual toggle to a schedulable pydantic model.

    Disabling is always accepted. Enabling is refused while the schedule
    date is still in the future; the entity comes back unchanged.
    """
    if value and not is_editable(entity.schedule_date, now):
        log_rejection(
            "set_enabled",
            Rejection.SCHEDULE_LOCKED.value,
            entity_id=getattr(entity, "id", None),
            schedule_date=entity.schedule_date.isoformat(),
        )
        return ToggleResult(entity=entity, rejection=Rejection.SCHEDULE_LOCKED)

    if entity.enabled == value:
        return ToggleResult(entity=entity)

    logger.debug("Enabled flag changed", entity_id=getattr(entity, "id", None), enabled=value)
    return ToggleResult(entity=entity.model_copy(update={"enabled": value}))
