import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from cryptography.fernet import Fernet
from loguru import logger
from pydantic import BaseModel

from pydantic_models.config.formatting_config import FormattingConfig
from pydantic_models.config.holiday_config import HolidayConfig
from pydantic_models.config.lock_config import LockConfig
from pydantic_models.config.logging_config import LoggingConfig
from pydantic_models.config.structure_config import StructureConfig
from pydantic_models.config.time_sheet_config import TimeSheetConfig

DEFAULT_CONFIG_PATH: Path = Path(".config") / "timeplan_config.yaml"


class Config:
    """
    Singleton für das Laden und Prüfen der Konfiguration.
    Nutzt statische Pydantic-Modelle für alle Abschnitte.
    Pfadangaben werden einmal beim Laden geprüft und danach als gültig angenommen.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, config_path: Path):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Path):
        # Fallback-Logger für Fehler beim Laden der Config
        logger.remove()
        logger.add(sys.stderr, level="WARNING")
        self.config_path = Path(config_path)
        try:
            self.raw_config: Dict[str, Any] = self._load_config()
            self.logging = self._parse_section(self.raw_config, "logging", LoggingConfig)
            self.structure = self._parse_section(self.raw_config, "structure", StructureConfig)
            self._setup_logging()
            logger.debug(f"Lade Konfiguration von {config_path}")
        except Exception as e:
            logger.error(f"Fehler beim Laden der Konfiguration: {e}")
            raise

        self.formatting = self._parse_section(self.raw_config, "formatting", FormattingConfig)
        self.time_sheet = self._parse_section(self.raw_config, "time_sheet", TimeSheetConfig)
        self.holidays = self._parse_section(self.raw_config, "holidays", HolidayConfig)
        self.lock = self._parse_section(self.raw_config, "lock", LockConfig)

        self._validate_structure_and_paths()
        logger.debug("Konfiguration erfolgreich geladen und validiert.")
        self._initialized = True

    @property
    def prj_root(self) -> Path:
        root = Path(self.structure.prj_root).expanduser()
        if not root.is_absolute():
            # relative Wurzel bezieht sich auf das Verzeichnis der Config-Datei
            root = self.config_path.resolve().parent / root
        return root.resolve()

    @property
    def workbook_path(self) -> Path:
        return self.prj_root / self.structure.workbook_path

    @property
    def ics_path(self) -> Optional[Path]:
        if not self.holidays.ics_file:
            return None
        return self.prj_root / self.holidays.ics_file

    def _setup_logging(self) -> None:
        """
        Initialisiert loguru mit den Einstellungen aus der Config-Datei.
        Relative Logdateien landen im structure.log_path.
        """
        logger.remove()
        log_file = getattr(self.logging, "log_file", None)
        log_level = getattr(self.logging, "log_level", "DEBUG")
        if log_file:
            log_target = Path(log_file)
            if not log_target.is_absolute():
                log_target = self.prj_root / (self.structure.log_path or ".logs") / log_target
            logger.add(log_target, level=log_level)
        logger.add(sys.stderr, level=log_level)

    def _load_config(self) -> Dict[str, Any]:
        """
        Lädt die YAML-Konfigurationsdatei. Eine leere Datei ergibt die Standardwerte.
        """
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _parse_section(self, config: Dict[str, Any], section: str, model: Type[BaseModel]) -> Any:
        """
        Parst einen Abschnitt der Config mit dem passenden Pydantic-Modell.
        """
        data = config.get(section) or {}
        logger.debug(f"Parsiere Abschnitt '{section}': {data}")
        return model(**data)

    def _validate_structure_and_paths(self) -> None:
        """
        Prüft einmalig alle Pfad- und Pflichtangaben. Scheitern die Prüfungen,
        wird die Konfiguration verworfen.
        """
        prj_root = self.prj_root
        if not prj_root.exists():
            logger.error(f"Projektwurzel existiert nicht: {prj_root}")
            raise FileNotFoundError(f"Projektwurzel nicht gefunden: {prj_root}")

        workbook_dir = self.workbook_path.parent
        if not workbook_dir.exists():
            logger.error(f"Verzeichnis der Arbeitszeit-Mappe existiert nicht: {workbook_dir}")
            raise FileNotFoundError(f"Verzeichnis der Arbeitszeit-Mappe nicht gefunden: {workbook_dir}")

        if not self.time_sheet.overview_sheet_name.strip():
            logger.error("time_sheet.overview_sheet_name ist leer.")
            raise ValueError("time_sheet.overview_sheet_name ist Pflicht.")

        if self.holidays.enabled and self.holidays.source == "ics":
            ics_path = self.ics_path
            if ics_path is None:
                logger.error("holidays.ics_file ist nicht gesetzt.")
                raise ValueError("holidays.ics_file ist Pflicht, wenn holidays.source 'ics' ist.")
            if not ics_path.exists():
                logger.error(f"Feiertagskalender nicht gefunden: {ics_path}")
                raise FileNotFoundError(f"Feiertagskalender nicht gefunden: {ics_path}")

        # Feiertage werden nur in der erweiterten Variante markiert, Warnung statt Fehler
        if self.holidays.enabled and self.time_sheet.variant == "basic":
            logger.warning("Feiertage sind aktiviert, werden in der Variante 'basic' aber nicht markiert.")

    def get_secret(self, key: str, default: Any = None) -> Optional[str]:
        """
        Gibt ein Secret (z. B. Passwort, API-Key) aus Umgebungsvariablen zurück.
        """
        logger.debug(f"Lese Secret '{key}' aus Umgebungsvariablen.")
        return os.getenv(key, default)

    def get_decrypted_secret(
        self, key: str, fernet_key_env: str = "FERNET_KEY", default: Any = None
    ) -> Optional[str]:
        """
        Holt ein verschlüsseltes Secret aus der Umgebung und entschlüsselt es mit Fernet.
        """
        encrypted = os.getenv(key)
        fernet_key = os.getenv(fernet_key_env)
        logger.debug(f"Versuche Secret '{key}' mit Fernet-Key '{fernet_key_env}' zu entschlüsseln.")
        if not encrypted or not fernet_key:
            logger.debug("Kein Secret oder Key gefunden, Rückgabe Default.")
            return default
        try:
            f = Fernet(fernet_key.encode())
            decrypted = f.decrypt(encrypted.encode())
            logger.debug("Secret erfolgreich entschlüsselt.")
            return decrypted.decode()
        except Exception as e:
            logger.error(f"Entschlüsselung fehlgeschlagen: {e}")
            raise RuntimeError(f"Entschlüsselung fehlgeschlagen: {e}") from e

    def secret(self, key: str, default: Any = None) -> Optional[str]:
        """
        Bevorzugt die verschlüsselte Variante <key>_ENC, sonst den Klartext aus der Umgebung.
        """
        return self.get_decrypted_secret(f"{key}_ENC") or self.get_secret(key, default)


if __name__ == "__main__":
    config = Config(DEFAULT_CONFIG_PATH)
    logger.info("Arbeitszeit-Mappe: {}", config.workbook_path)
    # Validierung erfolgt beim Laden automatisch
