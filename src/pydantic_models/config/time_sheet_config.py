from typing import List, Literal

from pydantic import BaseModel, PositiveFloat, field_validator


class BreakRule(BaseModel):
    """
    Pausenabzug: Ab mehr als threshold_minutes Arbeitszeit werden deduction_minutes abgezogen.
    """
    threshold_minutes: int
    deduction_minutes: int


class TimeSheetConfig(BaseModel):
    variant: Literal["extended", "basic"] = "extended"
    overview_sheet_name: str = "Overview"
    daily_target_hours: PositiveFloat = 8.0
    break_rules: List[BreakRule] = [
        BreakRule(threshold_minutes=360, deduction_minutes=30),
        BreakRule(threshold_minutes=540, deduction_minutes=45),
    ]

    @field_validator("break_rules")
    @classmethod
    def thresholds_must_be_unique(cls, v: List[BreakRule]) -> List[BreakRule]:
        thresholds = [rule.threshold_minutes for rule in v]
        if len(thresholds) != len(set(thresholds)):
            raise ValueError("break_rules enthalten doppelte Schwellenwerte.")
        return sorted(v, key=lambda rule: rule.threshold_minutes)
