from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

# Datumsformate für freie Texteingaben (Datumsauswahl, Kommandozeile)
DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%Y-%m", "%d.%m.%Y", "%m.%Y", "%Y/%m/%d")


def _parse_date_str(s: str) -> Optional[date]:
    s = s.strip()
    # ISO-Zeitstempel aus Browsern, z. B. "2024-02-01T00:00:00.000Z"
    if "T" in s:
        s = s.split("T", 1)[0]
    for fmt in DATE_FORMATS:
        try:
            d = datetime.strptime(s, fmt)
            return d.date()
        except ValueError:
            continue
    return None


_DATE_CONVERTERS: Dict[type, Callable[[Any], Optional[date]]] = {
    datetime: lambda v: v.date(),
    date: lambda v: v,
    str: _parse_date_str,
    type(None): lambda _v: None,
}


def to_date(v: Any) -> Optional[date]:
    """Typbasierte Datums-Konvertierung (None/str/date/datetime -> date|None)."""
    conv = _DATE_CONVERTERS.get(type(v))
    return conv(v) if conv else None


def first_of_month(v: Any) -> date:
    """Liefert den Monatsersten zu v; unlesbare Eingaben sind ein Fehler."""
    d = to_date(v)
    if d is None:
        raise ValueError(f"Ungültiges Datum: {v!r}")
    return d.replace(day=1)


def ensure_dir(path: Path) -> Path:
    """Erzeugt ein Verzeichnis (rekursiv), falls es fehlt, und gibt den Pfad zurück."""
    path.mkdir(parents=True, exist_ok=True)
    return path
