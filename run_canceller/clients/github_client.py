"""
GitHub Actions Client
=====================
Thin async wrapper around the two GitHub Actions endpoints the canceller needs:

    GET  /repos/{repo}/actions/runs?branch={branch}   → list runs for a branch
    POST /repos/{repo}/actions/runs/{id}/cancel       → cancel one run (202)

Every request is capped as a whole at `timeout` seconds and carries the
versioned Accept header and the token. One httpx.AsyncClient is shared by
all calls made through an instance, so concurrent cancellations reuse the same
connection pool.

Error mapping:
    httpx.RequestError (connect, read, timeout, ...) → TransportError
    whole call exceeding the timeout                  → TransportError
    unexpected HTTP status                            → ProviderError
    body is not JSON / not the expected envelope      → DecodeError
"""
import asyncio
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from run_canceller.core.config import Settings
from run_canceller.core.constants import (
    ACCEPT_MEDIA_TYPE,
    CANCEL_ACCEPTED_STATUS,
    GITHUB_API_URL,
    GITHUB_WEB_URL,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from run_canceller.core.errors import DecodeError, ProviderError, TransportError
from run_canceller.models.workflow_run import WorkflowRun, WorkflowRunsPage

logger = logging.getLogger(__name__)


class GitHubActionsClient:
    """
    Authenticated client for listing and cancelling workflow runs.

    Use as an async context manager so the underlying transport is closed:

        async with GitHubActionsClient(settings) as client:
            runs = await client.list_runs("main")

    TLS certificates are verified unless verify=False is passed explicitly.
    """

    def __init__(
        self,
        settings: Settings,
        verify: bool = True,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.repository = settings.repository
        self.headers = {
            "Accept": ACCEPT_MEDIA_TYPE,
            "User-Agent": USER_AGENT,
        }
        if settings.token:
            self.headers["Authorization"] = f"token {settings.token}"

        if not verify:
            logger.warning("TLS certificate verification is DISABLED for %s", GITHUB_API_URL)

        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=GITHUB_API_URL,
            headers=self.headers,
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubActionsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def dashboard_url(self, run_id: int) -> str:
        """Human-facing link to a run, used in log lines only."""
        return f"{GITHUB_WEB_URL}/{self.repository}/actions/runs/{run_id}"

    async def list_runs(self, branch: str) -> List[WorkflowRun]:
        """Return the runs GitHub reports for `branch` (first page only)."""
        url = f"/repos/{self.repository}/actions/runs"
        try:
            response = await asyncio.wait_for(
                self._client.get(url, params={"branch": branch}), self.timeout
            )
        except httpx.RequestError as e:
            raise TransportError(f"failed to list runs for branch {branch}: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"listing runs for branch {branch} timed out after {self.timeout}s"
            ) from e

        if not response.is_success:
            raise ProviderError(
                f"failed to list runs for branch {branch}, "
                f"status code: {response.status_code}, body: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError (non UTF-8 body)
            raise DecodeError(f"runs listing is not valid JSON: {e}") from e

        try:
            page = WorkflowRunsPage.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(f"unexpected runs listing shape: {e}") from e

        logger.debug("GitHub returned %d run(s) for branch %s", len(page.workflow_runs), branch)
        return list(page.workflow_runs)

    async def cancel_run(self, run_id: int) -> None:
        """Ask GitHub to cancel one run. Anything but 202 Accepted is an error."""
        url = f"/repos/{self.repository}/actions/runs/{run_id}/cancel"
        try:
            response = await asyncio.wait_for(self._client.post(url), self.timeout)
        except httpx.RequestError as e:
            raise TransportError(f"failed to cancel workflow run #{run_id}: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"cancelling workflow run #{run_id} timed out after {self.timeout}s"
            ) from e

        if response.status_code != CANCEL_ACCEPTED_STATUS:
            raise ProviderError(
                f"failed to cancel workflow run #{run_id}, "
                f"status code: {response.status_code}, body: {response.text}",
                status_code=response.status_code,
                body=response.text,
                run_id=run_id,
            )
