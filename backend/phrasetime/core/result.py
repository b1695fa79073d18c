"""
Result models for phrasetime.

Shared by the entry point and the job runner so neither imports the other.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class ParseStatus(str, Enum):
    OK = "ok"
    ERROR = "error"


class ParseErrorKind(str, Enum):
    """
    The only failure surfaced to callers. Calendar-invalid phrases
    ("feb 30") are reported as this too.
    """
    UNKNOWN_FORMAT = "unknown_format"


class ParseSource(str, Enum):
    """
    Which path produced the timestamp.
    """
    ISO8601 = "iso8601"  # Strict machine format, offset taken from the input.
    PHRASE = "phrase"    # Natural-language grammar, offset always 0.


class ParseResult(BaseModel):
    """
    The canonical output of parse().
    Either a timestamp with its UTC offset, or an error kind.
    """
    status: ParseStatus
    original_value: str

    timestamp: Optional[datetime] = None
    utc_offset: Optional[int] = None  # Seconds east of UTC; None when the input named no zone.
    source: Optional[ParseSource] = None
    error: Optional[ParseErrorKind] = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK

    def as_tuple(self) -> Union[tuple[str, datetime, Optional[int]], tuple[str, str]]:
        if self.ok:
            return (self.status.value, self.timestamp, self.utc_offset)
        return (self.status.value, self.error.value)

    @classmethod
    def success(
        cls,
        original: str,
        timestamp: datetime,
        utc_offset: Optional[int],
        source: ParseSource,
    ) -> "ParseResult":
        return cls(
            status=ParseStatus.OK,
            original_value=original,
            timestamp=timestamp,
            utc_offset=utc_offset,
            source=source,
        )

    @classmethod
    def unknown_format(cls, original: str) -> "ParseResult":
        return cls(
            status=ParseStatus.ERROR,
            original_value=original,
            error=ParseErrorKind.UNKNOWN_FORMAT,
        )
