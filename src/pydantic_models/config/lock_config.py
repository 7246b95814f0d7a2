from pydantic import BaseModel, PositiveFloat

class LockConfig(BaseModel):
    timeout_seconds: PositiveFloat = 1000.0
