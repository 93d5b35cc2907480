"""
Life history builder.

Builds the decade → year → month skeleton covering a lifetime from the birth
month up to (but excluding) the birth month ``max_age`` years later, with one
placeholder text event per month.
"""

from __future__ import annotations

import logging
from datetime import date

from lifehistory.clock import (
    Clock,
    IdFactory,
    mid_month,
    month_id,
    parse_date,
    system_clock,
    timestamp,
    uuid_factory,
)
from lifehistory.core.events import EventBus, NoticeTypes
from lifehistory.models import (
    LifeHistory,
    LifeHistoryDecade,
    LifeHistoryEvent,
    LifeHistoryMonth,
    LifeHistoryYear,
)

logger = logging.getLogger(__name__)

MAX_AGE = 80
PLACEHOLDER_USER_ID = "string"


def month_range(year: int, birth_year: int, birth_month: int, max_age: int = MAX_AGE) -> range:
    """
    Months of ``year`` that belong to the lifespan.

    The birth year starts at the birth month. The final year stops one month
    before the birth month, except for January births, whose final year runs
    through December.
    """
    start_month = 1
    end_month = 12

    if year == birth_year:
        start_month = birth_month
    if year == birth_year + max_age:
        end_month = birth_month - 1 or 12

    return range(start_month, end_month + 1)


def initiate(
    birth_date: str | date | None = None,
    *,
    clock: Clock | None = None,
    id_factory: IdFactory | None = None,
    max_age: int = MAX_AGE,
    user_id: str = PLACEHOLDER_USER_ID,
    bus: EventBus | None = None,
) -> LifeHistory:
    """
    Build the life history skeleton for a birth date.

    Args:
        birth_date: Birth date as a date or a parseable string. Falsy values
            produce an empty life history.
        clock: Source of the placeholder ``updated_at`` timestamp
        id_factory: Source of placeholder event ids
        max_age: Lifespan in years
        user_id: user_id stamped on placeholder events
        bus: Optional notice bus; receives ``life_history.built``

    Returns:
        Decades in ascending order
    """
    if not birth_date:
        return ()

    clock = clock or system_clock
    id_factory = id_factory or uuid_factory

    born = parse_date(birth_date)
    birth_year = born.year
    birth_month = born.month
    max_year = birth_year + max_age

    start_decade = birth_year // 10
    end_decade = max_year // 10
    updated_at = timestamp(clock)

    decades = []
    for decade_index, decade in enumerate(range(start_decade, end_decade + 1)):
        decade_start_year = decade * 10
        first_year = max(birth_year, decade_start_year)
        last_year = min(max_year, decade_start_year + 9)

        years = []
        for year in range(first_year, last_year + 1):
            months = []
            for month_index, month in enumerate(month_range(year, birth_year, birth_month, max_age)):
                placeholder = LifeHistoryEvent.text(
                    id=id_factory(),
                    event_date=mid_month(year, month),
                    event_text=str(month_index),
                    updated_at=updated_at,
                    user_id=user_id,
                )
                months.append(LifeHistoryMonth(month_id(year, month), month, (placeholder,)))
            years.append(LifeHistoryYear(f"year-{year}", year, tuple(months)))

        decades.append(LifeHistoryDecade(f"decade-{decade}", decade_index + 1, tuple(years)))

    life_history = tuple(decades)
    logger.debug(
        "Built life history for %s: %d decades, %d..%d",
        born.isoformat(),
        len(life_history),
        birth_year,
        max_year,
    )

    if bus is not None:
        bus.publish(
            NoticeTypes.LIFE_HISTORY_BUILT,
            {"birth_date": born.isoformat(), "decades": len(life_history)},
        )

    return life_history
