from datetime import date

from time_sheets.modules.calendar_helpers import (
    is_weekend,
    month_days,
    month_sheet_name,
    weekday_name,
    weekend_day_names,
)


def test_month_days_covers_whole_month():
    days = month_days(date(2024, 2, 17))
    assert len(days) == 29
    assert days[0] == date(2024, 2, 1)
    assert days[-1] == date(2024, 2, 29)


def test_month_days_lengths():
    assert len(month_days(date(2023, 2, 1))) == 28
    assert len(month_days(date(2024, 4, 1))) == 30
    assert len(month_days(date(2024, 12, 31))) == 31


def test_weekday_name_en_and_de():
    assert weekday_name(date(2024, 2, 1), "en") == "Thursday"
    assert weekday_name(date(2024, 2, 3), "de") == "Samstag"


def test_month_sheet_name():
    assert month_sheet_name(date(2024, 2, 1), "en") == "February 2024"
    assert month_sheet_name(date(2024, 11, 30), "de") == "November 2024"


def test_weekend_names_match_weekday_name():
    saturday, sunday = weekend_day_names("en")
    assert saturday == weekday_name(date(2024, 2, 3), "en") == "Saturday"
    assert sunday == weekday_name(date(2024, 2, 4), "en") == "Sunday"


def test_is_weekend():
    assert is_weekend(date(2024, 2, 3))
    assert is_weekend(date(2024, 2, 4))
    assert not is_weekend(date(2024, 2, 5))
