from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol

from loguru import logger
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from shared_modules.utils import ensure_dir
from time_sheets.modules.errors import DuplicateSheetError

OVERVIEW_HEADERS: List[str] = ["Month", "Total working time", "Target time", "Overtime", "Vacation Days"]


def overview_headers(variant: str = "extended") -> List[str]:
    """Kopfzeile des Übersichtsblatts; die Variante basic führt keine Urlaubstage."""
    if variant == "basic":
        return OVERVIEW_HEADERS[:4]
    return list(OVERVIEW_HEADERS)


class SpreadsheetHost(Protocol):
    """Schnittstelle der Arbeitsmappe, wie sie Builder und Updater benötigen."""

    @property
    def sheet_names(self) -> List[str]: ...

    def create_sheet(self, name: str) -> Worksheet: ...

    def get_sheet(self, name: str) -> Optional[Worksheet]: ...


class WorkbookHost:
    """
    Arbeitszeit-Mappe auf Basis von openpyxl.
    Ohne Pfad bleibt die Mappe im Speicher (z. B. für Tests).
    """

    def __init__(self, workbook: Workbook, path: Optional[Path] = None) -> None:
        self.workbook: Workbook = workbook
        self.path: Optional[Path] = path

    @classmethod
    def open(cls, path: Path) -> "WorkbookHost":
        """
        Lädt eine bestehende Arbeitszeit-Mappe.
        """
        try:
            wb = load_workbook(path)
        except Exception as exc:
            logger.error(f"Fehler beim Laden der Arbeitszeit-Mappe {path}: {exc}")
            raise RuntimeError(f"Fehler beim Laden der Arbeitszeit-Mappe: {exc}") from exc
        logger.debug(f"Arbeitszeit-Mappe geladen: {path} ({len(wb.sheetnames)} Blätter)")
        return cls(wb, path)

    @classmethod
    def create(cls, path: Optional[Path], overview_sheet_name: str, variant: str = "extended") -> "WorkbookHost":
        """
        Legt eine neue Mappe an, die nur das Übersichtsblatt mit Kopfzeile enthält.
        """
        wb = Workbook()
        ws = wb.active
        ws.title = overview_sheet_name
        ws.append(overview_headers(variant))
        for cell in ws[1]:
            cell.font = Font(bold=True)
        host = cls(wb, path)
        if path is not None:
            if path.exists():
                raise FileExistsError(f"Arbeitszeit-Mappe existiert bereits: {path}")
            ensure_dir(path.parent)
            host.save()
        return host

    @property
    def sheet_names(self) -> List[str]:
        return list(self.workbook.sheetnames)

    def create_sheet(self, name: str) -> Worksheet:
        """
        Fügt ein neues Blatt am Ende ein und macht es zum aktiven Blatt.
        openpyxl würde doppelte Namen stillschweigend umbenennen, deshalb wird hier abgebrochen.
        """
        if name in self.workbook.sheetnames:
            raise DuplicateSheetError(name)
        ws = self.workbook.create_sheet(title=name)
        self.workbook.active = ws
        logger.debug(f"Blatt '{name}' angelegt.")
        return ws

    def get_sheet(self, name: str) -> Optional[Worksheet]:
        if name not in self.workbook.sheetnames:
            return None
        return self.workbook[name]

    def save(self, path: Optional[Path] = None) -> Path:
        target = path or self.path
        if target is None:
            raise RuntimeError("Kein Speicherort für die Arbeitszeit-Mappe gesetzt.")
        try:
            self.workbook.save(target)
        except Exception as exc:
            logger.error(f"Fehler beim Speichern der Datei {target.name}: {exc}")
            raise RuntimeError(f"Fehler beim Speichern der Datei: {exc}") from exc
        logger.info(f"Arbeitszeit-Mappe gespeichert: {target}")
        return target
