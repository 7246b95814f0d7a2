from datetime import date, timedelta
from typing import List, Tuple

from babel.dates import format_date, get_day_names


def weekday_name(day: date, locale: str) -> str:
    """Ausgeschriebener Wochentag, z. B. "Monday" für locale "en"."""
    return format_date(day, format="EEEE", locale=locale)


def month_sheet_name(day: date, locale: str) -> str:
    """Blattname aus Monatsname und Jahr, z. B. "February 2024"."""
    return format_date(day, format="LLLL y", locale=locale)


def weekend_day_names(locale: str) -> Tuple[str, str]:
    """Samstag und Sonntag in der Schreibweise von weekday_name."""
    names = get_day_names("wide", context="format", locale=locale)
    return names[5], names[6]


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def month_days(day: date) -> List[date]:
    """
    Alle Tage des Monats von day, vom Ersten bis zum Monatsletzten.
    """
    current = day.replace(day=1)
    days: List[date] = []
    while current.month == day.month:
        days.append(current)
        current += timedelta(days=1)
    return days
