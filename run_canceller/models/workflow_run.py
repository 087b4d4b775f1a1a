"""
Workflow Run Model
==================
Pydantic models for the GitHub Actions "list workflow runs" response.

Fields:
    id          — opaque run id, used for the cancel call
    status      — queued / in_progress / completed / ... (provider defined)
    head_sha    — commit the run is building
    head_branch — branch the run was triggered for (GitHub may send null)
    run_number  — per-workflow sequence number

Only the fields the canceller reads are declared; the rest of the payload is
ignored. Instances are frozen snapshots of what the API returned.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class WorkflowRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    status: str = ""
    head_sha: str = ""
    head_branch: Optional[str] = None
    run_number: int = 0


class WorkflowRunsPage(BaseModel):
    """Envelope returned by GET /repos/{repo}/actions/runs."""
    model_config = ConfigDict(frozen=True)

    workflow_runs: List[WorkflowRun] = []
