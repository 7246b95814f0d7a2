from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class MonthSummary(BaseModel):
    """
    Ergebnis des Monatsaufbaus: Name des neuen Blatts und die Zelladressen der Summenwerte.
    Die Adressen werden unverändert weitergereicht und nicht geprüft.
    """
    model_config = ConfigDict(frozen=True)

    sheet_name: str
    total_time_ref: str
    target_time_ref: str
    overtime_ref: str
    vacation_days_ref: Optional[str] = None  # nur Variante "extended"

    def references(self) -> List[str]:
        """Zelladressen in Spaltenreihenfolge der Übersicht."""
        refs = [self.total_time_ref, self.target_time_ref, self.overtime_ref]
        if self.vacation_days_ref is not None:
            refs.append(self.vacation_days_ref)
        return refs
