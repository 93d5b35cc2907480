"""
Event mover.

Relocates one event from a source month to a target month and returns a new
life history. Only the decades, years and months on the path to the source and
target are rebuilt; every other node is shared with the input.

Lookup misses never raise. They are logged, published on the notice bus and
reported through MoveResult, and the input structure is handed back untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from lifehistory.clock import Clock, mid_month_from_id, system_clock, timestamp
from lifehistory.core.events import EventBus, NoticeTypes
from lifehistory.core.exceptions import EventNotFoundError, NotFoundError
from lifehistory.models import (
    LifeHistoryDecade,
    LifeHistoryEvent,
    LifeHistoryMonth,
    MonthLocation,
    find_month,
)

logger = logging.getLogger(__name__)

MonthUpdate = Callable[[LifeHistoryMonth], LifeHistoryMonth]


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a move.

    Attributes:
        life_history: The new structure, or the input itself when nothing moved
        moved: Whether the event was relocated
        event: The relocated event with its refreshed date, if moved
        reason: Why nothing moved, if it did not
    """
    life_history: Sequence[LifeHistoryDecade]
    moved: bool
    event: LifeHistoryEvent | None = None
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.moved


def _month_id(month: LifeHistoryMonth | str) -> str:
    return month if isinstance(month, str) else month.id


def _event_id(event: LifeHistoryEvent | str) -> str:
    return event if isinstance(event, str) else event.id


def _update_month(
    life_history: Sequence[LifeHistoryDecade],
    location: MonthLocation,
    update: MonthUpdate,
) -> tuple[LifeHistoryDecade, ...]:
    """Rebuild the path to ``location`` with ``update`` applied to its month."""
    decades = []
    for decade in life_history:
        if decade.id != location.decade.id:
            decades.append(decade)
            continue

        years = []
        for year in decade.years:
            if year.id != location.year.id:
                years.append(year)
                continue
            months = tuple(
                update(month) if month.id == location.month.id else month
                for month in year.months
            )
            years.append(replace(year, months=months))

        decades.append(replace(decade, years=tuple(years)))
    return tuple(decades)


def move_event(
    *,
    event: LifeHistoryEvent | str,
    life_history: Sequence[LifeHistoryDecade],
    source_month: LifeHistoryMonth | str,
    target_month: LifeHistoryMonth | str,
    clock: Clock | None = None,
    bus: EventBus | None = None,
) -> MoveResult:
    """
    Move an event into another month.

    The moved copy keeps its id and content, takes the 15th of the target month
    as ``event_date`` and the current time as ``updated_at``, and is appended
    to the end of the target month. Moving within the same month still refreshes
    the dates and sends the event to the end.

    Args:
        event: Event to move, or its id
        life_history: Structure to move within; never mutated
        source_month: Month currently holding the event, or its id
        target_month: Destination month, or its id
        clock: Source of the new ``updated_at``
        bus: Optional notice bus; receives ``event.moved`` or ``event.move_failed``

    Returns:
        MoveResult whose ``life_history`` is ``life_history`` itself when the
        source month, target month or event could not be found
    """
    event_id = _event_id(event)
    source_id = _month_id(source_month)
    target_id = _month_id(target_month)

    try:
        source = find_month(life_history, source_id)
        target = find_month(life_history, target_id)
        original = source.month.find_event(event_id)
        if original is None:
            raise EventNotFoundError(event_id, source_id)
    except NotFoundError as e:
        logger.error("Cannot move event %s from %s to %s: %s", event_id, source_id, target_id, e)
        if bus is not None:
            bus.publish(
                NoticeTypes.EVENT_MOVE_FAILED,
                {"event_id": event_id, "source": source_id, "target": target_id, "reason": str(e)},
            )
        return MoveResult(life_history=life_history, moved=False, reason=str(e))

    moved = replace(
        original,
        event_date=mid_month_from_id(target.month.id),
        updated_at=timestamp(clock or system_clock),
    )

    updated = _update_month(
        life_history,
        source,
        lambda month: replace(month, events=tuple(e for e in month.events if e.id != event_id)),
    )
    # The target path is looked up again by id, so a same-month move appends
    # to the already filtered list.
    updated = _update_month(
        updated,
        target,
        lambda month: replace(month, events=month.events + (moved,)),
    )

    logger.debug("Moved event %s from %s to %s", event_id, source_id, target_id)
    if bus is not None:
        bus.publish(
            NoticeTypes.EVENT_MOVED,
            {"event_id": event_id, "source": source_id, "target": target_id},
        )

    return MoveResult(life_history=updated, moved=True, event=moved)
