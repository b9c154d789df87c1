from __future__ import annotations

import json
import logging

import pytest

from gamecal import __main__ as cli
from gamecal.ui.app import CalendarApp, demo_config


def _write_config(tmp_path) -> str:
    path = tmp_path / "calendar.json"
    path.write_text(
        json.dumps(
            {
                "start": {"year": 2, "month": 6, "day": 15, "hour": 18},
                "periods": [{"id": "tide", "name": "Tide", "hours": 12}],
            }
        ),
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def launched(monkeypatch: pytest.MonkeyPatch) -> list[CalendarApp]:
    apps: list[CalendarApp] = []

    def _record_run(self: CalendarApp) -> None:
        apps.append(self)

    monkeypatch.setattr(CalendarApp, "run", _record_run)
    return apps


@pytest.fixture
def bare_root_logger(monkeypatch: pytest.MonkeyPatch):
    root = logging.getLogger()
    original_level = root.level
    # basicConfig only installs handlers on a root logger that has none.
    monkeypatch.setattr(root, "handlers", [])
    yield root
    root.setLevel(original_level)


def test_parser_reads_log_level_and_config(tmp_path) -> None:
    path = _write_config(tmp_path)

    args = cli.build_parser().parse_args(["--log-level", "DEBUG", "--config", path])

    assert args.log_level == "DEBUG"
    assert args.config == path


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])

    assert args.log_level == "WARNING"
    assert args.config is None


def test_parser_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--log-level", "CHATTY"])


def test_main_configures_logging_and_loads_config(
    tmp_path, launched: list[CalendarApp], bare_root_logger: logging.Logger
) -> None:
    cli.main(["--log-level", "DEBUG", "--config", _write_config(tmp_path)])

    assert bare_root_logger.level == logging.DEBUG
    assert len(launched) == 1
    calendar = launched[0].calendar
    assert calendar.current_ymd() == (2, 6, 15, 18)
    assert [period.id for period in calendar.periods] == ["tide"]


def test_main_without_config_runs_demo_calendar(
    launched: list[CalendarApp], bare_root_logger: logging.Logger
) -> None:
    cli.main(["--log-level", "INFO"])

    assert bare_root_logger.level == logging.INFO
    assert [period.id for period in launched[0].calendar.periods] == [
        spec.id for spec in demo_config().periods
    ]
