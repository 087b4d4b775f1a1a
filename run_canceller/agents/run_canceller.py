"""
Run Canceller
=============
Cancels stale workflow runs for the branch the current run is building.

Flow:
    list runs for branch → filter → cancel every eligible run concurrently
    → wait for all cancellations → log a summary

A run is cancelled only when ALL of these hold:
    1. it is not completed
    2. its head_branch is the current branch (re-checked locally; the listing
       is already filtered server-side)
    3. its head_sha differs from the current commit (never cancel ourselves)
    4. when the current run number is known (non-zero), its run_number is not
       greater than ours (newer runs are left alone)

Failure handling:
    - listing failures end the run early; they are logged, never raised
    - each cancellation runs in its own task and swallows its own failure
      into a CancelOutcome, so one bad run never stops the others
"""
import asyncio
import logging
from typing import Iterable, List, Optional

from run_canceller.clients.github_client import GitHubActionsClient
from run_canceller.core.config import Settings
from run_canceller.core.constants import STATUS_COMPLETED
from run_canceller.core.errors import CIClientError
from run_canceller.models.cancel_outcome import CancelOutcome
from run_canceller.models.run_identity import RunIdentity
from run_canceller.models.workflow_run import WorkflowRun

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Filter policy
# ---------------------------------------------------------------------------
def _skip_reason(run: WorkflowRun, identity: RunIdentity) -> Optional[str]:
    """Return why `run` must be left alone, or None if it may be cancelled."""
    if run.status == STATUS_COMPLETED:
        return "already completed"
    if run.head_branch != identity.branch:
        return f"different branch {run.head_branch!r}"
    if run.head_sha == identity.commit_sha:
        return "same commit as current run"
    if identity.run_number != 0 and run.run_number > identity.run_number:
        return f"newer run #{run.run_number}"
    return None


def is_cancellable(run: WorkflowRun, identity: RunIdentity) -> bool:
    return _skip_reason(run, identity) is None


def select_runs_to_cancel(
    runs: Iterable[WorkflowRun], identity: RunIdentity
) -> List[WorkflowRun]:
    """Filter `runs` down to the stale ones, preserving order."""
    selected = []
    for run in runs:
        reason = _skip_reason(run, identity)
        if reason:
            logger.debug("Skipping run %d: %s", run.id, reason)
            continue
        selected.append(run)
    return selected


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
class RunCanceller:
    """Lists, filters and cancels stale runs for one invocation."""

    def __init__(self, client: GitHubActionsClient, settings: Settings) -> None:
        self.client = client
        self.settings = settings

    async def run(self) -> List[CancelOutcome]:
        identity = self.settings.identity
        logger.info(
            "listing runs for branch %s in repo %s", identity.branch, self.settings.repository
        )

        try:
            runs = await self.client.list_runs(identity.branch)
        except CIClientError as e:
            logger.error("Could not list workflow runs: %s", e)
            return []

        stale = select_runs_to_cancel(runs, identity)
        if not stale:
            logger.info("No stale runs to cancel (%d run(s) listed)", len(runs))
            return []

        for run in stale:
            logger.info("canceling run %s", self.client.dashboard_url(run.id))

        # Barrier: returns only after every task has finished
        outcomes = await asyncio.gather(*(self._cancel_one(run) for run in stale))

        cancelled = sum(1 for o in outcomes if o.success)
        logger.info("cancelled %d of %d stale run(s)", cancelled, len(outcomes))
        return list(outcomes)

    async def _cancel_one(self, run: WorkflowRun) -> CancelOutcome:
        url = self.client.dashboard_url(run.id)
        try:
            await self.client.cancel_run(run.id)
        except CIClientError as e:
            logger.error("Failed to cancel run %d (%s): %s", run.id, url, e)
            return CancelOutcome(run_id=run.id, dashboard_url=url, success=False, error=str(e))
        except Exception as e:
            logger.exception("Unexpected error cancelling run %d (%s)", run.id, url)
            return CancelOutcome(run_id=run.id, dashboard_url=url, success=False, error=str(e))

        logger.debug("Cancel accepted for run %d", run.id)
        return CancelOutcome(run_id=run.id, dashboard_url=url, success=True)


async def cancel_stale_runs(
    settings: Settings, client: Optional[GitHubActionsClient] = None
) -> List[CancelOutcome]:
    """Run the canceller, opening (and closing) a client when none is given."""
    if client is not None:
        return await RunCanceller(client, settings).run()

    async with GitHubActionsClient(settings) as owned_client:
        return await RunCanceller(owned_client, settings).run()
