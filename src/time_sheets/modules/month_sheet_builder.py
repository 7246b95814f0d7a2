from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from loguru import logger
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import column_index_from_string
from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from pydantic_models.config.time_sheet_config import BreakRule
from pydantic_models.data.month_summary import MonthSummary
from pydantic_models.data.sheet_layout import SheetLayout
from shared_modules.config import Config
from time_sheets.modules.calendar_helpers import is_weekend, month_days, weekday_name, weekend_day_names
from time_sheets.modules.holiday_calendar import HolidayCalendar, holiday_name
from time_sheets.modules.workbook_host import SpreadsheetHost

HEADER_ROW = 1
FIRST_DAY_ROW = 2

TOTAL_LABEL = "Total working time"
TARGET_LABEL = "Target time"
OVERTIME_LABEL = "Overtime"
VACATION_LABEL = "Vacation Days"

VACATION_HALF = "Half"
VACATION_FULL = "Full"


def work_time_formula(layout: SheetLayout, row: int, break_rules: List[BreakRule]) -> str:
    """
    Formel für die Arbeitszeit einer Tageszeile: Ende - Beginn (- Zusatzpause) abzüglich Pausenabzug.
    Verglichen wird in ganzen Minuten; genau auf der Schwelle gibt es noch keinen Abzug.
    """
    worked = f"{layout.end}{row}-{layout.start}{row}"
    if layout.brk:
        worked += f"-{layout.brk}{row}"
    minutes = f"ROUND(({worked})*1440,0)"

    expression = worked
    for rule in sorted(break_rules, key=lambda r: r.threshold_minutes):
        deducted = f"{worked}-TIME(0,{rule.deduction_minutes},0)"
        expression = f"IF({minutes}>{rule.threshold_minutes},{deducted},{expression})"
    return f"={expression}"


class MonthSheetBuilder:
    """
    Baut das Monatsblatt: Kopfzeile, eine Zeile pro Tag, Formeln, Validierungen,
    Formatierung und den Summenblock. Liefert die Zelladressen der Summen als MonthSummary.
    """

    def __init__(
        self,
        config: Config,
        host: SpreadsheetHost,
        holiday_calendar: Optional[HolidayCalendar] = None,
    ) -> None:
        self.config: Config = config
        self.host: SpreadsheetHost = host
        self.holiday_calendar: Optional[HolidayCalendar] = holiday_calendar

        self.layout: SheetLayout = SheetLayout.for_variant(config.time_sheet.variant)
        self.locale: str = config.formatting.locale
        self.weekend_fill = PatternFill(fill_type="solid", fgColor=config.formatting.weekend_fill)
        self.holiday_fill = PatternFill(fill_type="solid", fgColor=config.formatting.holiday_fill)

        if self.layout.is_extended and holiday_calendar is None:
            logger.debug("Keine Feiertagsquelle gesetzt, Feiertage werden nicht markiert.")

    # --------------------------------------------------------------------- #
    # Aufbau
    # --------------------------------------------------------------------- #

    def build(self, month_date: date, sheet_name: str) -> MonthSummary:
        """
        Legt das Blatt sheet_name an und befüllt es für den Monat von month_date.
        Der Tag von month_date spielt keine Rolle.

        Raises:
            DuplicateSheetError: Wenn das Blatt bereits existiert (vom Host, nicht abgefangen).
        """
        ws = self.host.create_sheet(sheet_name)
        layout = self.layout

        ws.append(layout.headers)

        days = month_days(month_date)
        row = FIRST_DAY_ROW
        for day in days:
            self._append_day_row(ws, day, row)
            row += 1
        last_row = row - 1
        logger.debug(f"{len(days)} Tageszeilen für '{sheet_name}' geschrieben.")

        self._apply_validations(ws, last_row)
        summary = self._append_summary_rows(ws, sheet_name, last_row)
        self._apply_formatting(ws, last_row)

        logger.info(f"Monatsblatt '{sheet_name}' aufgebaut ({len(days)} Tage).")
        return summary

    def _append_day_row(self, ws: Worksheet, day: date, row: int) -> None:
        layout = self.layout
        values: List[Any] = [None] * layout.column_count
        values[_idx(layout.date)] = day
        values[_idx(layout.weekday)] = weekday_name(day, self.locale)
        values[_idx(layout.work)] = work_time_formula(layout, row, self.config.time_sheet.break_rules)
        if layout.sick:
            # entspricht einer nicht angehakten Checkbox
            values[_idx(layout.sick)] = False
        ws.append(values)

        # Wochenenden grau hinterlegt
        if is_weekend(day):
            self._fill_row(ws, row, self.weekend_fill)

        # Feiertage blau hinterlegt, Name in der Feiertagsspalte
        name = self._holiday_name(day)
        if name is not None:
            self._fill_row(ws, row, self.holiday_fill)
            ws[f"{layout.holiday}{row}"] = name
            logger.debug(f"Feiertag am {day.isoformat()}: {name}")

    def _holiday_name(self, day: date) -> Optional[str]:
        if not self.layout.is_extended or self.holiday_calendar is None:
            return None
        cfg = self.config.holidays
        return holiday_name(self.holiday_calendar, day, cfg.region_marker, cfg.accepted_descriptions)

    def _fill_row(self, ws: Worksheet, row: int, fill: PatternFill) -> None:
        for col in range(1, self.layout.column_count + 1):
            ws.cell(row=row, column=col).fill = fill

    # --------------------------------------------------------------------- #
    # Datenvalidierung
    # --------------------------------------------------------------------- #

    def _apply_validations(self, ws: Worksheet, last_row: int) -> None:
        layout = self.layout

        # Beginn, Ende (und Zusatzpause) nur als Uhrzeit
        time_rule = DataValidation(
            type="time",
            operator="between",
            formula1="0",
            formula2="0.999988425925926",
            allow_blank=True,
            showErrorMessage=True,
        )
        time_rule.errorTitle = "Time"
        time_rule.error = "Please enter a valid time (hh:mm)."
        ws.add_data_validation(time_rule)
        time_last_col = layout.brk or layout.end
        time_rule.add(f"{layout.start}{FIRST_DAY_ROW}:{time_last_col}{last_row}")

        if not layout.is_extended:
            return

        checkbox_rule = DataValidation(type="list", formula1='"TRUE,FALSE"', allow_blank=True, showErrorMessage=True)
        ws.add_data_validation(checkbox_rule)
        checkbox_rule.add(f"{layout.sick}{FIRST_DAY_ROW}:{layout.sick}{last_row}")

        vacation_rule = DataValidation(
            type="list",
            formula1=f'"{VACATION_HALF},{VACATION_FULL}"',
            allow_blank=True,
            showErrorMessage=True,
        )
        vacation_rule.errorTitle = "Vacation"
        vacation_rule.error = f"Pick {VACATION_HALF} or {VACATION_FULL}."
        ws.add_data_validation(vacation_rule)
        vacation_rule.add(f"{layout.vacation}{FIRST_DAY_ROW}:{layout.vacation}{last_row}")

    # --------------------------------------------------------------------- #
    # Summenblock
    # --------------------------------------------------------------------- #

    def _append_summary_rows(self, ws: Worksheet, sheet_name: str, last_row: int) -> MonthSummary:
        layout = self.layout
        first = FIRST_DAY_ROW

        def rng(col: str) -> str:
            return f"{col}{first}:{col}{last_row}"

        saturday, sunday = weekend_day_names(self.locale)
        daily_target = f"{self.config.time_sheet.daily_target_hours}/24"
        weekdays = f'{rng(layout.weekday)},"<>{sunday}",{rng(layout.weekday)},"<>{saturday}"'

        if layout.is_extended:
            total = f'=SUMIF({rng(layout.vacation)},"<>{VACATION_FULL}",{rng(layout.work)})'
            working_days = (
                f'COUNTIFS({weekdays},{rng(layout.vacation)},"=",'
                f'{rng(layout.sick)},FALSE,{rng(layout.holiday)},"=")'
            )
            half_days = f'COUNTIFS({rng(layout.vacation)},"={VACATION_HALF}")*0.5'
            target = f"={daily_target}*({working_days}+{half_days})"
        else:
            total = f"=SUM({rng(layout.work)})"
            target = f"={daily_target}*COUNTIFS({weekdays})"

        # Leerzeile als Trenner, darunter Beschriftung in Spalte B und Formel in Spalte C
        separator_row = last_row + 1
        total_row = separator_row + 1
        target_row = total_row + 1
        overtime_row = target_row + 1
        value_col = layout.value_column

        ws.append([" "])
        ws.append(self._summary_row(TOTAL_LABEL, total))
        ws.append(self._summary_row(TARGET_LABEL, target))
        ws.append(self._summary_row(OVERTIME_LABEL, f"={value_col}{total_row}-{value_col}{target_row}"))

        vacation_ref: Optional[str] = None
        if layout.is_extended:
            vacation_row = overtime_row + 1
            vacation = (
                f'=COUNTIFS({rng(layout.vacation)},"={VACATION_FULL}",{rng(layout.sick)},FALSE)'
                f'+COUNTIFS({rng(layout.vacation)},"={VACATION_HALF}")*0.5'
            )
            ws.append(self._summary_row(VACATION_LABEL, vacation))
            vacation_ref = f"{value_col}{vacation_row}"

        return MonthSummary(
            sheet_name=sheet_name,
            total_time_ref=f"{value_col}{total_row}",
            target_time_ref=f"{value_col}{target_row}",
            overtime_ref=f"{value_col}{overtime_row}",
            vacation_days_ref=vacation_ref,
        )

    def _summary_row(self, label: str, formula: str) -> List[Any]:
        values: List[Any] = [None] * (column_index_from_string(self.layout.value_column))
        values[_idx(self.layout.label_column)] = label
        values[_idx(self.layout.value_column)] = formula
        return values

    # --------------------------------------------------------------------- #
    # Formatierung
    # --------------------------------------------------------------------- #

    def _apply_formatting(self, ws: Worksheet, last_row: int) -> None:
        layout = self.layout
        fmt = self.config.formatting
        value_col = layout.value_column
        total_row = last_row + 2
        overtime_row = total_row + 2
        summary_last_row = ws.max_row

        for row in range(FIRST_DAY_ROW, last_row + 1):
            ws[f"{layout.date}{row}"].number_format = fmt.date_format
            ws[f"{layout.work}{row}"].number_format = fmt.duration_format
            for col in filter(None, (layout.start, layout.end, layout.brk)):
                ws[f"{col}{row}"].number_format = fmt.time_format

        # Gesamt, Soll und Überstunden als Stunden:Minuten über 24h hinaus
        for row in range(total_row, overtime_row + 1):
            ws[f"{value_col}{row}"].number_format = fmt.duration_format

        bold = Font(bold=True)
        for cell in ws[HEADER_ROW]:
            cell.font = bold
        for row in range(total_row, summary_last_row + 1):
            ws[f"{layout.label_column}{row}"].font = bold
        if layout.brk:
            ws[f"{layout.brk}{HEADER_ROW}"].alignment = Alignment(wrap_text=True)

        for col in layout.autofit_columns:
            self._autofit_column(ws, col)

    def _autofit_column(self, ws: Worksheet, col: str) -> None:
        """Spaltenbreite nach dem längsten Text (Formeln ausgenommen)."""
        width = 0
        for cell in ws[col]:
            if cell.value is None or cell.data_type == "f":
                continue
            longest_line = max(len(line) for line in str(cell.value).split("\n"))
            width = max(width, longest_line)
        if width:
            ws.column_dimensions[col].width = width + 2


def _idx(col: str) -> int:
    return column_index_from_string(col) - 1
