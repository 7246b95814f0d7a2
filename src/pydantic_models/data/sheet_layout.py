from typing import List, Literal, Optional

from pydantic import BaseModel


class SheetLayout(BaseModel):
    """
    Spaltenbelegung eines Monatsblatts.
    Optionale Spalten (Pause, Urlaub, Krank, Feiertag, Kommentar) gibt es nur in der Variante "extended".
    """

    headers: List[str]
    date: str = "A"
    weekday: str = "B"
    start: str = "C"
    end: str = "D"
    work: str
    brk: Optional[str] = None
    vacation: Optional[str] = None
    sick: Optional[str] = None
    holiday: Optional[str] = None
    comments: Optional[str] = None
    autofit_columns: List[str] = []

    # Beschriftung und Werte des Summenblocks unterhalb der Tageszeilen
    label_column: str = "B"
    value_column: str = "C"

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def is_extended(self) -> bool:
        return self.vacation is not None

    @classmethod
    def for_variant(cls, variant: Literal["extended", "basic"]) -> "SheetLayout":
        if variant == "basic":
            return cls(
                headers=["Date", "Weekday", "Start time", "End time", "Work time"],
                work="E",
                autofit_columns=["B"],
            )
        return cls(
            headers=[
                "Date",
                "Weekday",
                "Start time",
                "End time",
                "Additional break /\nInterruption",
                "Work time",
                "Vacation",
                "Sick day",
                "Holidays",
                "Comments",
            ],
            brk="E",
            work="F",
            vacation="G",
            sick="H",
            holiday="I",
            comments="J",
            autofit_columns=["B", "E", "I"],
        )
