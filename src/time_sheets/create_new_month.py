import argparse
from pathlib import Path
from typing import List, Optional

from loguru import logger
from rich import print
from rich.prompt import Prompt

from shared_modules.config import DEFAULT_CONFIG_PATH, Config
from shared_modules.locks import LockTimeoutError
from time_sheets.modules.holiday_calendar import holiday_calendar_from_config
from time_sheets.modules.new_month_processor import NewMonthProcessor
from time_sheets.modules.workbook_host import WorkbookHost


def pick_month() -> Optional[str]:
    """Datumsauswahl auf der Kommandozeile; leere Eingabe bricht ab."""
    answer = Prompt.ask("Please pick the month you want to record! [dim](YYYY-MM, empty to cancel)[/dim]", default="")
    return answer.strip() or None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Legt ein neues Monatsblatt in der Arbeitszeit-Mappe an.")
    parser.add_argument("month", nargs="?", help="Monat als YYYY-MM oder Datum (ohne Angabe: Abfrage)")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Pfad zur YAML-Konfiguration")
    parser.add_argument("--init", action="store_true", help="Neue Arbeitszeit-Mappe mit Übersichtsblatt anlegen")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Einstiegspunkt für das Anlegen eines neuen Monats.
    Lädt die Konfiguration, baut Feiertagsquelle und Processor und startet die Verarbeitung.
    """
    args = parse_args(argv)
    config = Config(args.config)

    if args.init:
        try:
            host = WorkbookHost.create(
                config.workbook_path, config.time_sheet.overview_sheet_name, config.time_sheet.variant
            )
        except FileExistsError as exc:
            print(f"[red]{exc}[/red]")
            return 1
        print(f"[green]Arbeitszeit-Mappe angelegt:[/green] {host.path}")
        if not args.month:
            return 0

    processor = NewMonthProcessor(config, holiday_calendar_from_config(config))
    try:
        if args.month:
            summary = processor.submit(args.month)
        else:
            summary = processor.start_new_month(pick_month)
    except (RuntimeError, ValueError, LockTimeoutError) as exc:
        # fehlende Mappe oder Übersicht, doppelter Monat, ungültiges Datum, belegte Sperre
        logger.error(f"Monatsblatt nicht angelegt: {exc}")
        print(f"[red]{exc}[/red]")
        return 1

    if summary is None:
        print("[yellow]Abgebrochen.[/yellow]")
        return 0

    logger.info(f"Monatsblatt '{summary.sheet_name}' erfolgreich erstellt.")
    print(f"[green]Monatsblatt angelegt:[/green] {summary.sheet_name} -> {config.workbook_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
