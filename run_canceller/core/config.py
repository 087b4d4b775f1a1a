"""
Configuration
=============
Loads environment variables (and an optional .env file via python-dotenv)
into an immutable Settings object.

Environment Variables:
    GITHUB_REPOSITORY  — owner/name slug of the repository (required)
    GITHUB_TOKEN       — API token used for listing and cancelling runs
    GITHUB_REF         — current ref; "refs/heads/" is stripped to get the branch
    GITHUB_SHA         — commit the current run is building
    GITHUB_RUN_NUMBER  — current run number; missing or unparsable means 0 (unknown)
    LOG_LEVEL          — logging level name (default: INFO)

Settings are read once at startup and passed explicitly to the client and the
canceller, so the filter can be exercised with synthetic identities.
"""
import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from run_canceller.core.constants import BRANCH_REF_PREFIX
from run_canceller.core.errors import ConfigError
from run_canceller.models.run_identity import RunIdentity

load_dotenv()

logger = logging.getLogger(__name__)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    repository: str
    token: str = ""
    identity: RunIdentity


def branch_from_ref(ref: str) -> str:
    """Turn 'refs/heads/feature/x' into 'feature/x'; other refs pass through."""
    if ref.startswith(BRANCH_REF_PREFIX):
        return ref[len(BRANCH_REF_PREFIX):]
    return ref


def parse_run_number(raw: Optional[str]) -> int:
    if not raw:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring unparsable GITHUB_RUN_NUMBER %r", raw)
        return 0


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment (or the given mapping)."""
    env = os.environ if environ is None else environ

    repository = env.get("GITHUB_REPOSITORY", "").strip()
    if not repository:
        raise ConfigError("GITHUB_REPOSITORY is not set")

    token = env.get("GITHUB_TOKEN", "")
    if not token:
        logger.warning("GITHUB_TOKEN is not set, API calls will be unauthenticated")

    identity = RunIdentity(
        branch=branch_from_ref(env.get("GITHUB_REF", "")),
        commit_sha=env.get("GITHUB_SHA", ""),
        run_number=parse_run_number(env.get("GITHUB_RUN_NUMBER")),
    )
    return Settings(repository=repository, token=token, identity=identity)
