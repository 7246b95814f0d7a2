from loguru import logger

from pydantic_models.data.month_summary import MonthSummary
from shared_modules.config import Config
from time_sheets.modules.errors import MissingOverviewSheetError
from time_sheets.modules.workbook_host import SpreadsheetHost

# Spalten der Übersicht mit Stundenwerten (Gesamt, Soll, Überstunden)
DURATION_COLUMNS = (2, 3, 4)


class OverviewUpdater:
    """
    Hängt für ein neues Monatsblatt eine Zeile an die Übersicht an.
    Die Zelladressen aus der MonthSummary werden als blattübergreifende Bezüge geschrieben.
    """

    def __init__(self, config: Config, host: SpreadsheetHost) -> None:
        self.host: SpreadsheetHost = host
        self.overview_sheet_name: str = config.time_sheet.overview_sheet_name
        self.duration_format: str = config.formatting.duration_format

    def update(self, summary: MonthSummary) -> int:
        """
        Schreibt die Übersichtszeile und gibt deren Zeilennummer zurück.

        Raises:
            MissingOverviewSheetError: Wenn das Übersichtsblatt fehlt; es wird nichts geschrieben.
        """
        ws = self.host.get_sheet(self.overview_sheet_name)
        if ws is None:
            logger.error(f"Übersichtsblatt '{self.overview_sheet_name}' fehlt in der Arbeitszeit-Mappe.")
            raise MissingOverviewSheetError(self.overview_sheet_name)

        prefix = f"='{summary.sheet_name}'!"
        ws.append([summary.sheet_name, *(prefix + ref for ref in summary.references())])
        row = ws.max_row
        for col in DURATION_COLUMNS:
            ws.cell(row=row, column=col).number_format = self.duration_format

        logger.info(f"Übersicht '{self.overview_sheet_name}' um '{summary.sheet_name}' ergänzt (Zeile {row}).")
        return row
