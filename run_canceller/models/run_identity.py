"""
Run Identity Model
Facts about the workflow run that invoked the canceller, taken from the
environment rather than the API. A run_number of 0 means "unknown".
"""
from pydantic import BaseModel, ConfigDict


class RunIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    branch: str
    commit_sha: str
    run_number: int = 0
