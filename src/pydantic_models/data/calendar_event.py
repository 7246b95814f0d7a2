from datetime import date

from pydantic import BaseModel


class CalendarEvent(BaseModel):
    """
    Ein Kalendereintrag, wie ihn eine Feiertagsquelle für einen Tag liefert.
    """
    day: date
    title: str
    description: str = ""
