from datetime import date
from pathlib import Path
from typing import Dict, List

import pytest
import yaml

from pydantic_models.data.calendar_event import CalendarEvent
from shared_modules.config import Config


class FakeHolidayCalendar:
    """Feiertagsquelle mit fest vorgegebenen Einträgen."""

    def __init__(self, events: Dict[date, List[CalendarEvent]] = None):
        self.events = events or {}
        self.requested: List[date] = []

    def events_for_day(self, day: date) -> List[CalendarEvent]:
        self.requested.append(day)
        return list(self.events.get(day, []))


def _deep_update(base: dict, overrides: dict) -> dict:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


@pytest.fixture
def make_config(tmp_path: Path):
    """Schreibt eine Config-Datei nach tmp_path und lädt sie."""

    def _make(**overrides) -> Config:
        raw = {
            "structure": {"prj_root": ".", "workbook_path": "Arbeitszeit.xlsx"},
            "logging": {"log_file": None, "log_level": "DEBUG"},
            "holidays": {"enabled": False},
        }
        _deep_update(raw, overrides)
        config_path = tmp_path / "timeplan_config.yaml"
        config_path.write_text(yaml.safe_dump(raw, allow_unicode=True), encoding="utf-8")
        return Config(config_path)

    return _make


@pytest.fixture
def config(make_config) -> Config:
    return make_config()


@pytest.fixture
def fake_calendar() -> FakeHolidayCalendar:
    return FakeHolidayCalendar(
        {
            date(2024, 12, 24): [CalendarEvent(day=date(2024, 12, 24), title="Heiligabend", description="Gedenktag")],
            date(2024, 12, 25): [
                CalendarEvent(day=date(2024, 12, 25), title="Erster Weihnachtstag", description="Gesetzlicher Feiertag")
            ],
            date(2024, 12, 26): [
                CalendarEvent(day=date(2024, 12, 26), title="Zweiter Weihnachtstag", description="Gesetzlicher Feiertag")
            ],
        }
    )


@pytest.fixture
def empty_calendar() -> FakeHolidayCalendar:
    return FakeHolidayCalendar()
