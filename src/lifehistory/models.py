"""
Life history data model.

A life history is an ordered tuple of decades; each decade owns years, each
year owns months and each month owns events. All nodes are frozen so that a
move can share every untouched branch with the structure it was derived from.

Wire shape (what to_dict produces and from_dict accepts):

    {"id": "decade-200", "decade": 1, "years": [
        {"id": "year-2000", "year": 2000, "months": [
            {"id": "2000-06", "month": 6, "events": [
                {"id": "...", "event_date": "2000-06-15", "event_text": "0",
                 "updated_at": "2024-03-01T10:15:00+01:00", "user_id": "string"}
            ]}
        ]}
    ]}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lifehistory.core.exceptions import MonthNotFoundError

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Event payload kind."""
    TEXT = "text"
    IMAGE = "image"


_PAYLOAD_KEYS = {
    EventKind.TEXT: "event_text",
    EventKind.IMAGE: "event_image",
}


@dataclass(frozen=True)
class LifeHistoryEvent:
    """
    A text or image entry attached to one month.

    Attributes:
        id: Globally unique event id
        event_date: Date inside the owning month (YYYY-MM-DD)
        updated_at: ISO-8601 timestamp of the last change
        user_id: Author id
        kind: Payload kind, fixed at construction
        content: Text body for TEXT events, image reference (URL or storage key) for IMAGE events
    """
    id: str
    event_date: str
    updated_at: str
    user_id: str
    kind: EventKind = EventKind.TEXT
    content: str = ""

    @classmethod
    def text(cls, id: str, event_date: str, event_text: str, updated_at: str, user_id: str) -> LifeHistoryEvent:
        return cls(id, event_date, updated_at, user_id, EventKind.TEXT, event_text)

    @classmethod
    def image(cls, id: str, event_date: str, event_image: str, updated_at: str, user_id: str) -> LifeHistoryEvent:
        return cls(id, event_date, updated_at, user_id, EventKind.IMAGE, event_image)

    @property
    def event_text(self) -> str | None:
        return self.content if self.kind is EventKind.TEXT else None

    @property
    def event_image(self) -> str | None:
        return self.content if self.kind is EventKind.IMAGE else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "event_date": self.event_date,
            _PAYLOAD_KEYS[self.kind]: self.content,
            "updated_at": self.updated_at,
            "user_id": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LifeHistoryEvent:
        """
        Build an event from its wire shape.

        The kind comes from whichever payload is truthy, text first. An event
        whose payload keys are all empty keeps the kind of the key it carries.
        When both payloads are truthy the image is dropped with a warning.

        Raises:
            ValueError: If neither event_text nor event_image is present
        """
        if data.get("event_text"):
            kind = EventKind.TEXT
        elif data.get("event_image"):
            kind = EventKind.IMAGE
        elif "event_text" in data:
            kind = EventKind.TEXT
        elif "event_image" in data:
            kind = EventKind.IMAGE
        else:
            raise ValueError(f"Event {data.get('id')!r} carries neither event_text nor event_image")

        if data.get("event_text") and data.get("event_image"):
            logger.warning(
                "Event %s carries both event_text and event_image; dropping event_image",
                data.get("id"),
            )

        return cls(
            id=str(data["id"]),
            event_date=data["event_date"],
            updated_at=data["updated_at"],
            user_id=data["user_id"],
            kind=kind,
            content=data.get(_PAYLOAD_KEYS[kind]) or "",
        )


EventLike = LifeHistoryEvent | Mapping[str, Any]


def is_text_event(event: EventLike) -> bool:
    """True when the event carries a non-empty event_text."""
    if isinstance(event, LifeHistoryEvent):
        return event.kind is EventKind.TEXT and bool(event.content)
    return bool(event.get("event_text"))


def is_image_event(event: EventLike) -> bool:
    """True when the event carries a non-empty event_image."""
    if isinstance(event, LifeHistoryEvent):
        return event.kind is EventKind.IMAGE and bool(event.content)
    return bool(event.get("event_image"))


@dataclass(frozen=True)
class LifeHistoryMonth:
    id: str
    month: int
    events: tuple[LifeHistoryEvent, ...] = field(default_factory=tuple)

    def find_event(self, event_id: str) -> LifeHistoryEvent | None:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "month": self.month,
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LifeHistoryMonth:
        return cls(
            id=data["id"],
            month=int(data["month"]),
            events=tuple(LifeHistoryEvent.from_dict(e) for e in data.get("events", [])),
        )


@dataclass(frozen=True)
class LifeHistoryYear:
    id: str
    year: int
    months: tuple[LifeHistoryMonth, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "year": self.year,
            "months": [month.to_dict() for month in self.months],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LifeHistoryYear:
        return cls(
            id=data["id"],
            year=int(data["year"]),
            months=tuple(LifeHistoryMonth.from_dict(m) for m in data.get("months", [])),
        )


@dataclass(frozen=True)
class LifeHistoryDecade:
    """
    One decade of the calendar.

    Attributes:
        id: "decade-<n>" where n is the absolute decade number (year // 10)
        decade: 1-based position of the decade within the life history
        years: Years of the decade that fall inside the lifespan
    """
    id: str
    decade: int
    years: tuple[LifeHistoryYear, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "decade": self.decade,
            "years": [year.to_dict() for year in self.years],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LifeHistoryDecade:
        return cls(
            id=data["id"],
            decade=int(data["decade"]),
            years=tuple(LifeHistoryYear.from_dict(y) for y in data.get("years", [])),
        )


LifeHistory = tuple[LifeHistoryDecade, ...]


@dataclass(frozen=True)
class MonthLocation:
    """Path from the root of a life history down to one month."""
    decade: LifeHistoryDecade
    year: LifeHistoryYear
    month: LifeHistoryMonth


def life_history_to_list(life_history: Iterable[LifeHistoryDecade]) -> list[dict[str, Any]]:
    return [decade.to_dict() for decade in life_history]


def life_history_from_list(data: Iterable[Mapping[str, Any]]) -> LifeHistory:
    return tuple(LifeHistoryDecade.from_dict(d) for d in data)


def iter_months(life_history: Iterable[LifeHistoryDecade]) -> Iterator[MonthLocation]:
    """Yield every month in calendar order together with its owners."""
    for decade in life_history:
        for year in decade.years:
            for month in year.months:
                yield MonthLocation(decade, year, month)


def find_month(life_history: Iterable[LifeHistoryDecade], month_id: str) -> MonthLocation:
    """
    Locate the month carrying ``month_id``.

    Linear scan over the whole structure; a lifetime is under a thousand months.

    Raises:
        MonthNotFoundError: If no month carries the id
    """
    for location in iter_months(life_history):
        if location.month.id == month_id:
            return location
    raise MonthNotFoundError(month_id)
