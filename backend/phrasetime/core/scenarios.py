from __future__ import annotations

"""Scenario files and YAML loader.

A scenario file pins a reference instant and lists phrases with the result
each must produce. Used by the job runner (--scenarios) and the test-suite.

Format:
    currently: "2016-01-01T00:00:00"
    scenarios:
      month_and_day:
        phrase: "aug 2"
        expect: {timestamp: "2016-08-02T00:00:00", offset: 0}
      garbage:
        phrase: "xyz not a date"
        expect: {error: unknown_format}
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from phrasetime.core.clock import CurrentInstant
from phrasetime.core.parser import parse
from phrasetime.core.result import ParseErrorKind, ParseResult


DEFAULT_SCENARIOS = Path(__file__).resolve().parents[1] / "config" / "scenarios.yaml"

_NO_OFFSET = object()


@dataclass(frozen=True, slots=True)
class Scenario:
    name: str
    phrase: str
    timestamp: Optional[datetime] = None
    offset: Any = _NO_OFFSET
    error: Optional[ParseErrorKind] = None

    def check(self, result: ParseResult) -> bool:
        if self.error is not None:
            return not result.ok and result.error is self.error
        if not result.ok or result.timestamp != self.timestamp:
            return False
        return self.offset is _NO_OFFSET or result.utc_offset == self.offset


@dataclass(frozen=True, slots=True)
class ScenarioOutcome:
    scenario: Scenario
    result: ParseResult
    passed: bool


@dataclass(frozen=True, slots=True)
class ScenarioSet:
    currently: Optional[CurrentInstant]
    scenarios: list[Scenario]

    def run(self, parser: Callable[..., ParseResult] = parse) -> list[ScenarioOutcome]:
        outcomes: list[ScenarioOutcome] = []
        for s in self.scenarios:
            result = parser(s.phrase, currently=self.currently)
            outcomes.append(ScenarioOutcome(scenario=s, result=result, passed=s.check(result)))
        return outcomes


def _as_datetime(value: Any, where: str) -> datetime:
    # PyYAML turns unquoted timestamps into datetime already.
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) if value.tzinfo is not None else value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"Invalid timestamp in {where}: {value!r}") from e
    raise ValueError(f"Invalid timestamp in {where}: {value!r}")


def _scenario(name: str, cfg: Any) -> Scenario:
    if not isinstance(cfg, dict) or not isinstance(cfg.get("phrase"), str):
        raise ValueError(f"Invalid scenario {name!r}: expected mapping with string 'phrase'.")
    expect = cfg.get("expect")
    if not isinstance(expect, dict):
        raise ValueError(f"Invalid scenario {name!r}: missing 'expect' mapping.")

    if "error" in expect:
        try:
            error = ParseErrorKind(str(expect["error"]))
        except ValueError as e:
            raise ValueError(f"Invalid scenario {name!r}: unknown error {expect['error']!r}") from e
        return Scenario(name=name, phrase=cfg["phrase"], error=error)

    if "timestamp" not in expect:
        raise ValueError(f"Invalid scenario {name!r}: expect needs 'timestamp' or 'error'.")
    return Scenario(
        name=name,
        phrase=cfg["phrase"],
        timestamp=_as_datetime(expect["timestamp"], name),
        offset=expect["offset"] if "offset" in expect else _NO_OFFSET,
    )


def load_scenarios_yaml(path: Path) -> ScenarioSet:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict) or not isinstance(raw.get("scenarios"), dict):
        raise ValueError("Invalid scenario file: expected top-level mapping with 'scenarios'.")

    currently = None
    if raw.get("currently") is not None:
        currently = CurrentInstant.from_datetime(_as_datetime(raw["currently"], "currently"))

    scenarios = [_scenario(str(name), cfg) for name, cfg in raw["scenarios"].items()]
    return ScenarioSet(currently=currently, scenarios=scenarios)
