from __future__ import annotations

"""Resolve phrases from the command line: phrase -> ISO fast path | grammar -> JSON log line.

STRICT:
- Settings come from flags first, then PT_* environment variables (.env honoured).
- One structured log event per phrase; never raises on an unresolved phrase.
- Exit code 1 if any phrase or scenario failed, 2 on invalid configuration, else 0.

Run:
  python backend/phrasetime/jobs/run_resolve.py "aug 3 at 9am" "tuesday"
  python backend/phrasetime/jobs/run_resolve.py --scenarios backend/phrasetime/config/scenarios.yaml
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import yaml

# Ensure `backend/` is on sys.path so `import phrasetime...` works when run from repo root.
BASE_DIR = Path(__file__).resolve().parents[2]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from phrasetime.core.env import load_env_if_present  # noqa: E402
from phrasetime.core.parser import parse  # noqa: E402
from phrasetime.core.result import ParseResult  # noqa: E402
from phrasetime.core.scenarios import ScenarioSet, load_scenarios_yaml  # noqa: E402
from phrasetime.core.settings import Settings, load_settings, parse_currently  # noqa: E402


logger = logging.getLogger("phrasetime.jobs")


def _log(event: dict) -> None:
    logger.info(json.dumps(event, ensure_ascii=False, default=str))


def _result_event(result: ParseResult) -> dict:
    event = {
        "event": "resolved",
        "phrase": result.original_value,
        "status": result.status.value,
    }
    if result.ok:
        event["timestamp"] = result.timestamp.isoformat()
        event["utc_offset"] = result.utc_offset
        event["source"] = result.source.value
    else:
        event["error"] = result.error.value
    return event


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Resolve informal date/time phrases to timestamps.")
    p.add_argument("phrases", nargs="*", help="e.g. 'aug 3 at 9am', 'half past 2'")
    p.add_argument("--currently", help="ISO-8601 reference instant (default: PT_CURRENTLY or UTC now)")
    p.add_argument("--debug", action="store_true", default=None, help="Log normalized words and tokens")
    p.add_argument("--scenarios", type=Path, help="Scenario YAML file to verify (default: PT_SCENARIOS_YAML)")
    return p


def _apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.currently:
        settings = replace(settings, currently=parse_currently(args.currently))
    if args.debug is not None:
        settings = replace(settings, debug=args.debug)
    if args.scenarios is not None:
        settings = replace(settings, scenarios_path=args.scenarios)
    return settings


def _config_error(detail: str) -> int:
    logger.error(json.dumps({"event": "config_error", "detail": detail}, ensure_ascii=False))
    return 2


def run_scenarios(scenario_set: ScenarioSet, path: Path) -> int:
    outcomes = scenario_set.run()

    failed = [o for o in outcomes if not o.passed]
    for o in failed:
        _log({
            "event": "scenario_failed",
            "scenario": o.scenario.name,
            "phrase": o.scenario.phrase,
            "expected_timestamp": o.scenario.timestamp,
            "expected_error": o.scenario.error.value if o.scenario.error else None,
            "got": _result_event(o.result),
        })

    _log({"event": "scenarios", "path": str(path), "total": len(outcomes), "failed": len(failed)})
    return 1 if failed else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_env_if_present()

    args = build_arg_parser().parse_args(argv)
    try:
        settings = _apply_args(load_settings(), args)
    except ValueError as e:
        return _config_error(str(e))

    scenario_set = None
    if settings.scenarios_path is not None:
        try:
            scenario_set = load_scenarios_yaml(settings.scenarios_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            return _config_error(f"{settings.scenarios_path}: {e}")

    logger.setLevel(settings.log_level)
    # Ensure logs are visible when run from a console.
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.log_level, format="%(message)s")

    exit_code = 0

    if scenario_set is not None:
        exit_code = max(exit_code, run_scenarios(scenario_set, settings.scenarios_path))

    for phrase in args.phrases:
        result = parse(phrase, currently=settings.currently, debug=settings.debug)
        _log(_result_event(result))
        if not result.ok:
            exit_code = max(exit_code, 1)

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
