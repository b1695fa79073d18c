"""phrasetime: resolve informal date/time phrases to timestamps."""

from phrasetime.core import CurrentInstant, ParseResult, PhraseParser, parse

__all__ = ["CurrentInstant", "ParseResult", "PhraseParser", "parse"]
