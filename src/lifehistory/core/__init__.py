"""Core modules for Life History."""

from lifehistory.core.config import Config
from lifehistory.core.events import EventBus, NoticeTypes
from lifehistory.core.exceptions import (
    ConfigurationError,
    EventNotFoundError,
    LifeHistoryError,
    MonthNotFoundError,
    NotFoundError,
)

__all__ = [
    "Config",
    "EventBus",
    "NoticeTypes",
    "LifeHistoryError",
    "ConfigurationError",
    "NotFoundError",
    "MonthNotFoundError",
    "EventNotFoundError",
]
