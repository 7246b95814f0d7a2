from typing import List, Literal, Optional
from pydantic import BaseModel

class HolidayConfig(BaseModel):
    """
    Modell für die Feiertags-Konfiguration.

    Attribute:
        enabled (bool): Feiertage überhaupt markieren.
        source (str): "library" (Paket holidays) oder "ics" (exportierter Kalender).
        country (str): Ländercode für das Paket holidays.
        language (Optional[str]): Sprache der Feiertagsnamen (Standard der Länderdefinition).
        ics_file (Optional[str]): Pfad zur .ics-Datei relativ zu prj_root.
        region_marker (str): Teiltext der Beschreibung, der einen regionalen Feiertag kennzeichnet.
        accepted_descriptions (List[str]): Beschreibungen, die ohne Region akzeptiert werden.
    """
    enabled: bool = True
    source: Literal["library", "ics"] = "library"
    country: str = "DE"
    language: Optional[str] = None
    ics_file: Optional[str] = None
    region_marker: str = "Baden-Württemberg"
    accepted_descriptions: List[str] = ["Gesetzlicher Feiertag"]
