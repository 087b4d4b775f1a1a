"""
Cancel Outcome Model
Result of one dispatched cancellation task.
"""
from pydantic import BaseModel, ConfigDict


class CancelOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    run_id: int
    dashboard_url: str
    success: bool
    error: str = ""
