from typing import Optional
from pydantic import BaseModel

class LoggingConfig(BaseModel):
    log_file: Optional[str] = "timeplan.log"      # Defaultwert
    log_level: Optional[str] = "INFO"             # Defaultwert
