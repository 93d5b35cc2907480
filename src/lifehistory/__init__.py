"""
Life History - a lifetime calendar of decades, years, months and events.

Builds the month-by-month skeleton of a life from a birth date and relocates
events between months without mutating the structure it was given.
"""

__version__ = "1.0.0"

from lifehistory.builder import MAX_AGE, initiate
from lifehistory.core.config import Config
from lifehistory.core.events import EventBus, NoticeTypes
from lifehistory.core.exceptions import (
    ConfigurationError,
    EventNotFoundError,
    LifeHistoryError,
    MonthNotFoundError,
)
from lifehistory.models import (
    EventKind,
    LifeHistory,
    LifeHistoryDecade,
    LifeHistoryEvent,
    LifeHistoryMonth,
    LifeHistoryYear,
    is_image_event,
    is_text_event,
)
from lifehistory.mover import MoveResult, move_event

__all__ = [
    "__version__",
    "MAX_AGE",
    "initiate",
    "move_event",
    "MoveResult",
    "Config",
    "EventBus",
    "NoticeTypes",
    "LifeHistoryError",
    "ConfigurationError",
    "MonthNotFoundError",
    "EventNotFoundError",
    "EventKind",
    "LifeHistory",
    "LifeHistoryDecade",
    "LifeHistoryYear",
    "LifeHistoryMonth",
    "LifeHistoryEvent",
    "is_text_event",
    "is_image_event",
]
