from __future__ import annotations

from enum import Enum


class ObservationType(str, Enum):
    SPAN = "span"
    GENERATION = "generation"
    EVENT = "event"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    DEFAULT = "DEFAULT"
    WARNING = "WARNING"
    ERROR = "ERROR"
