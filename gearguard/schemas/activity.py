from datetime import datetime
from pydantic import BaseModel, ConfigDict

class ActivityLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    LogID: int
    ReferenceType: str
    ReferenceID: int
    Action: str
    PerformedBy: int
    Timestamp: datetime
