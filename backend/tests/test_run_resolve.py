from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from phrasetime.core.scenarios import DEFAULT_SCENARIOS
from phrasetime.jobs.run_resolve import main


def _events(caplog: pytest.LogCaptureFixture) -> list[dict]:
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "phrasetime.jobs"]


@pytest.fixture(autouse=True)
def _no_env_files(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("phrasetime.jobs.run_resolve.load_env_if_present", lambda: [])


def test_resolves_phrases_and_logs_json(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")

    code = main(["--currently", "2016-01-01T00:00:00", "aug 2 9:15am", "2012-08-02T13:00:00+01:00"])

    assert code == 0
    first, second = _events(caplog)
    assert first == {
        "event": "resolved",
        "phrase": "aug 2 9:15am",
        "status": "ok",
        "timestamp": "2016-08-02T09:15:00",
        "utc_offset": 0,
        "source": "phrase",
    }
    assert second["utc_offset"] == 3600
    assert second["source"] == "iso8601"


def test_unresolved_phrase_sets_exit_code(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")

    code = main(["--currently", "2016-01-01T00:00:00", "xyz not a date"])

    assert code == 1
    (event,) = _events(caplog)
    assert event["status"] == "error"
    assert event["error"] == "unknown_format"


def test_currently_from_environment(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")
    monkeypatch.setenv("PT_CURRENTLY", "1999-01-01T00:00:00")

    assert main(["aug 2"]) == 0
    assert _events(caplog)[0]["timestamp"] == "1999-08-02T00:00:00"


def test_runs_shipped_scenarios(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")

    assert main(["--scenarios", str(DEFAULT_SCENARIOS)]) == 0

    summary = _events(caplog)[-1]
    assert summary["event"] == "scenarios"
    assert summary["failed"] == 0
    assert summary["total"] > 30


def test_invalid_currently_is_config_error(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")

    assert main(["--currently", "not a time", "aug 2"]) == 2
    assert _events(caplog)[0]["event"] == "config_error"


@pytest.mark.parametrize(
    "body",
    [
        None,
        "scenarios: [",
        "scenarios: []",
    ],
)
def test_unreadable_scenario_file_is_config_error(tmp_path: Path, caplog: pytest.LogCaptureFixture, body):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")
    path = tmp_path / "scenarios.yaml"
    if body is not None:
        path.write_text(body, encoding="utf-8")

    assert main(["--scenarios", str(path), "aug 2"]) == 2

    (event,) = _events(caplog)
    assert event["event"] == "config_error"
    assert str(path) in event["detail"]


def test_scenario_file_from_environment_is_checked(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="phrasetime.jobs")
    monkeypatch.setenv("PT_SCENARIOS_YAML", str(tmp_path / "missing.yaml"))

    assert main([]) == 2
    assert _events(caplog)[0]["event"] == "config_error"


def test_debug_flag_emits_trace(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO)

    assert main(["--debug", "--currently", "2016-01-01T00:00:00", "tuesday"]) == 0

    traces = [r for r in caplog.records if r.name == "phrasetime.trace"]
    assert len(traces) == 1
    assert json.loads(traces[0].getMessage())["tokens"] == [{"kind": "weekday", "weekday": 1}]
