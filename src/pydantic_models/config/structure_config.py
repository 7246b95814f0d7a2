from typing import Optional
from pydantic import BaseModel

class StructureConfig(BaseModel):
    """
    Modell für die Struktur-Konfiguration des Projekts.

    Attribute:
        prj_root (str): Wurzelverzeichnis des Projekts (relativ zur Config-Datei).
        workbook_path (str): Pfad zur Arbeitszeit-Mappe relativ zu prj_root.
        log_path (Optional[str]): Pfad zum Log-Verzeichnis relativ zu prj_root (Standard: ".logs").
    """
    prj_root: str = "."
    workbook_path: str = "data/Arbeitszeit.xlsx"
    log_path: Optional[str] = ".logs"
