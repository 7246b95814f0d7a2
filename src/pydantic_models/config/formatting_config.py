from pydantic import BaseModel

class FormattingConfig(BaseModel):
    locale: str = "en"
    date_format: str = "dd-mm-yyyy"
    time_format: str = "hh:mm"
    duration_format: str = "[h]:mm"
    weekend_fill: str = "C8C8C8"
    holiday_fill: str = "C8C8F0"
