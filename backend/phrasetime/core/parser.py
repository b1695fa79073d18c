"""
Entry point for phrasetime.

Resolution order:
1. Strict ISO-8601 (offset taken from the input, None if it named no zone).
2. Natural-language grammar against `currently` (offset always 0).
3. Anything else is unknown_format. No guessing, no clamping.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Optional, Union

from phrasetime.core.clock import CurrentInstant, ErlTuple, utc_now
from phrasetime.core.errors import CalendarInvalidError, Iso8601Error, UnknownFormatError
from phrasetime.core.grammar import GrammarResolver
from phrasetime.core.iso8601 import parse_iso8601
from phrasetime.core.result import ParseResult, ParseSource
from phrasetime.core.tokenizer import normalize_phrase, tokenize
from phrasetime.core.tokens import describe

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("phrasetime.trace")

Currently = Union[CurrentInstant, datetime, date, ErlTuple]


class PhraseParser:
    """
    Resolves phrases to timestamps. Stateless; safe to share across threads.
    """

    def __init__(self, resolver: Optional[GrammarResolver] = None):
        self.resolver = resolver or GrammarResolver()

    def parse(
        self,
        phrase: str,
        *,
        currently: Optional[Currently] = None,
        debug: bool = False,
    ) -> ParseResult:
        """
        Main entry point.

        Args:
            phrase: Raw input, ISO-8601 or a short English phrase.
            currently: Reference instant for relative phrases. Defaults to
                       the UTC wall clock read at call time.
            debug: Log the normalized words and tokens. No effect on the result.

        Returns:
            ParseResult: ok with timestamp and offset, or error unknown_format.
        """
        if not isinstance(phrase, str):
            raise TypeError(f"phrase must be a str, got {type(phrase).__name__}")

        # 1. Fast path
        try:
            timestamp, offset = parse_iso8601(phrase)
            logger.debug("ISO-8601 fast path matched %r", phrase)
            return ParseResult.success(phrase, timestamp, offset, ParseSource.ISO8601)
        except Iso8601Error:
            pass

        # 2. Grammar path
        instant = CurrentInstant.coerce(currently) if currently is not None else utc_now()

        words = normalize_phrase(phrase)
        tokens = tokenize(words)
        if debug:
            trace_logger.info(json.dumps({
                "event": "phrase_tokens",
                "phrase": phrase,
                "words": words,
                "tokens": [describe(t) for t in tokens],
            }, ensure_ascii=False))

        try:
            timestamp = self.resolver.resolve(tokens, instant)
        except UnknownFormatError:
            return ParseResult.unknown_format(phrase)
        except CalendarInvalidError as e:
            logger.debug("Calendar-invalid phrase %r: %s", phrase, e)
            return ParseResult.unknown_format(phrase)

        return ParseResult.success(phrase, timestamp, 0, ParseSource.PHRASE)


_default_parser = PhraseParser()


def parse(
    phrase: str,
    *,
    currently: Optional[Currently] = None,
    debug: bool = False,
) -> ParseResult:
    """Parse with the shared default PhraseParser. See PhraseParser.parse."""
    return _default_parser.parse(phrase, currently=currently, debug=debug)
