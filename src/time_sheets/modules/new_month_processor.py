from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from pydantic_models.data.month_summary import MonthSummary
from shared_modules.config import Config
from shared_modules.locks import workbook_lock
from shared_modules.utils import first_of_month
from time_sheets.modules.calendar_helpers import month_sheet_name
from time_sheets.modules.holiday_calendar import HolidayCalendar
from time_sheets.modules.month_sheet_builder import MonthSheetBuilder
from time_sheets.modules.overview_updater import OverviewUpdater
from time_sheets.modules.workbook_host import WorkbookHost


class NewMonthProcessor:
    """
    Ablauf "neuen Monat anlegen": Datumsauswahl, Monatsblatt aufbauen, Übersicht ergänzen, speichern.
    Die Aktion läuft unter einer Sperre je Arbeitszeit-Mappe, die auch andere Prozesse ausschließt.
    """

    def __init__(
        self,
        config: Config,
        holiday_calendar: Optional[HolidayCalendar] = None,
        host: Optional[WorkbookHost] = None,
    ) -> None:
        """
        Args:
            config: Geprüfte Konfiguration.
            holiday_calendar: Feiertagsquelle, None schaltet die Markierung ab.
            host: Feste Arbeitsmappe; ohne Angabe wird die Mappe aus der Config je Lauf neu geladen.
        """
        self.config: Config = config
        self.holiday_calendar: Optional[HolidayCalendar] = holiday_calendar
        self._host: Optional[WorkbookHost] = host
        self.lock_name: str = str(config.workbook_path)

    def _open_host(self) -> WorkbookHost:
        if self._host is not None:
            return self._host
        return WorkbookHost.open(self.config.workbook_path)

    def sheet_submitted(self, date_str: str) -> MonthSummary:
        """
        Legt das Monatsblatt für date_str an und ergänzt die Übersicht.
        Gespeichert wird erst, wenn beides gelungen ist.
        """
        month = first_of_month(date_str)
        sheet_name = month_sheet_name(month, self.config.formatting.locale)
        logger.info(f"Lege Monatsblatt '{sheet_name}' an.")

        host = self._open_host()
        builder = MonthSheetBuilder(self.config, host, self.holiday_calendar)
        updater = OverviewUpdater(self.config, host)

        summary = builder.build(month, sheet_name)
        updater.update(summary)

        if host.path is not None:
            host.save()
        return summary

    def submit(self, date_str: str) -> MonthSummary:
        """sheet_submitted unter der Sperre, z. B. für das Formular der Weboberfläche."""
        with workbook_lock(self.lock_name, self.config.lock.timeout_seconds):
            return self.sheet_submitted(date_str)

    def start_new_month(self, pick_date: Callable[[], Optional[str]]) -> Optional[MonthSummary]:
        """
        Öffnet die Datumsauswahl unter der Sperre. Ein leeres Ergebnis gilt als Abbruch.
        """
        with workbook_lock(self.lock_name, self.config.lock.timeout_seconds):
            date_str = pick_date()
            if not date_str:
                logger.info("Datumsauswahl abgebrochen, keine Änderungen.")
                return None
            return self.sheet_submitted(date_str)
