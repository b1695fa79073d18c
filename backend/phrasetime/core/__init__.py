"""Phrase resolution engine.

- Tokenize words into typed tokens
- Match token shapes against a fixed grammar catalogue
- Strict ISO-8601 fast path before any grammar work
"""

from phrasetime.core.calendar_math import FieldSet, add_seconds, combine, next_weekday
from phrasetime.core.clock import CurrentInstant, utc_now
from phrasetime.core.errors import (
    CalendarInvalidError,
    Iso8601Error,
    ResolutionError,
    UnknownFormatError,
)
from phrasetime.core.grammar import CATALOGUE, GrammarResolver, Pattern, shape_of
from phrasetime.core.iso8601 import parse_iso8601
from phrasetime.core.parser import PhraseParser, parse
from phrasetime.core.result import ParseErrorKind, ParseResult, ParseSource, ParseStatus
from phrasetime.core.tokenizer import classify, normalize_phrase, tokenize

__all__ = [
    "FieldSet",
    "add_seconds",
    "combine",
    "next_weekday",
    "CurrentInstant",
    "utc_now",
    "CalendarInvalidError",
    "Iso8601Error",
    "ResolutionError",
    "UnknownFormatError",
    "CATALOGUE",
    "GrammarResolver",
    "Pattern",
    "shape_of",
    "parse_iso8601",
    "PhraseParser",
    "parse",
    "ParseErrorKind",
    "ParseResult",
    "ParseSource",
    "ParseStatus",
    "classify",
    "normalize_phrase",
    "tokenize",
]
