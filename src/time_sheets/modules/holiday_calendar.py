from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

import holidays
from icalendar import Calendar
from loguru import logger

from pydantic_models.data.calendar_event import CalendarEvent
from shared_modules.config import Config

NATIONWIDE_DESCRIPTION = "Gesetzlicher Feiertag"

# Bundesländer für lesbare Beschreibungen regionaler Feiertage
GERMAN_STATES: Dict[str, str] = {
    "BB": "Brandenburg",
    "BE": "Berlin",
    "BW": "Baden-Württemberg",
    "BY": "Bayern",
    "HB": "Bremen",
    "HE": "Hessen",
    "HH": "Hamburg",
    "MV": "Mecklenburg-Vorpommern",
    "NI": "Niedersachsen",
    "NW": "Nordrhein-Westfalen",
    "RP": "Rheinland-Pfalz",
    "SH": "Schleswig-Holstein",
    "SL": "Saarland",
    "SN": "Sachsen",
    "ST": "Sachsen-Anhalt",
    "TH": "Thüringen",
}


class HolidayCalendar(Protocol):
    """Quelle für Kalendereinträge eines Tages (Titel und Beschreibung)."""

    def events_for_day(self, day: date) -> List[CalendarEvent]: ...


class PublicHolidayCalendar:
    """
    Feiertage aus dem Paket holidays, aufbereitet wie ein öffentlicher Feiertagskalender:
    landesweite Feiertage tragen die Beschreibung "Gesetzlicher Feiertag",
    regionale Feiertage "Feiertag in <Bundesländer>".
    """

    def __init__(self, country: str = "DE", language: Optional[str] = None) -> None:
        self.country = country
        self._nationwide = holidays.country_holidays(country, language=language)
        self._regional = {
            code: holidays.country_holidays(country, subdiv=code, language=language)
            for code in self._nationwide.subdivisions
        }
        logger.debug(f"Feiertagskalender {country} mit {len(self._regional)} Regionen geladen.")

    def _region_name(self, code: str) -> str:
        if self.country == "DE":
            return GERMAN_STATES.get(code, code)
        return code

    def events_for_day(self, day: date) -> List[CalendarEvent]:
        title = self._nationwide.get(day)
        if title:
            return [CalendarEvent(day=day, title=title, description=NATIONWIDE_DESCRIPTION)]

        regions = [code for code, calendar in self._regional.items() if day in calendar]
        if not regions:
            return []
        names = ", ".join(self._region_name(code) for code in regions)
        return [
            CalendarEvent(
                day=day,
                title=self._regional[regions[0]].get(day),
                description=f"Feiertag in {names}",
            )
        ]


class IcsHolidayCalendar:
    """
    Feiertage aus einer exportierten Kalenderdatei (.ics), z. B. dem öffentlichen Google-Feiertagskalender.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._events: Dict[date, List[CalendarEvent]] = defaultdict(list)
        try:
            with open(path, "rb") as f:
                calendar = Calendar.from_ical(f.read())
        except Exception as exc:
            logger.error(f"Fehler beim Lesen des Feiertagskalenders {path}: {exc}")
            raise RuntimeError(f"Fehler beim Lesen des Feiertagskalenders: {exc}") from exc

        for component in calendar.walk("VEVENT"):
            title = str(component.get("SUMMARY", ""))
            description = str(component.get("DESCRIPTION", ""))
            start = _as_date(component.decoded("DTSTART"))
            end = _as_date(component.decoded("DTEND")) if "DTEND" in component else None
            for day in _event_days(start, end):
                self._events[day].append(CalendarEvent(day=day, title=title, description=description))
        logger.debug(f"{sum(len(v) for v in self._events.values())} Kalendereinträge aus {path.name} gelesen.")

    def events_for_day(self, day: date) -> List[CalendarEvent]:
        return list(self._events.get(day, []))


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _event_days(start: date, end: Optional[date]) -> Iterable[date]:
    # DTEND ist bei ganztägigen Einträgen exklusiv
    if end is None or end <= start:
        return [start]
    return [start + timedelta(days=offset) for offset in range((end - start).days)]


def holiday_name(
    calendar: HolidayCalendar,
    day: date,
    region_marker: str,
    accepted_descriptions: Iterable[str],
) -> Optional[str]:
    """
    Name des Feiertags an day oder None.
    Geprüft wird nur der erste Eintrag des Tages: er zählt, wenn seine Beschreibung den
    region_marker enthält oder genau einer der accepted_descriptions entspricht.
    """
    events = calendar.events_for_day(day)
    if not events:
        return None

    first = events[0]
    description = first.description
    if (region_marker and region_marker in description) or description in set(accepted_descriptions):
        return first.title
    return None


def holiday_calendar_from_config(config: Config) -> Optional[HolidayCalendar]:
    """
    Erzeugt die konfigurierte Feiertagsquelle; None, wenn Feiertage abgeschaltet sind.
    """
    cfg = config.holidays
    if not cfg.enabled:
        logger.info("Feiertage sind in der Konfiguration abgeschaltet.")
        return None
    if cfg.source == "ics":
        return IcsHolidayCalendar(config.ics_path)
    return PublicHolidayCalendar(cfg.country, cfg.language)
