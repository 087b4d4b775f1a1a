"""
Constants
Fixed GitHub Actions protocol values shared by the client and the canceller.
"""
GITHUB_API_URL = "https://api.github.com"
GITHUB_WEB_URL = "https://github.com"

ACCEPT_MEDIA_TYPE = "application/vnd.github.v3+json"
USER_AGENT = "stale-run-canceller"

BRANCH_REF_PREFIX = "refs/heads/"

# Only status the canceller treats specially; everything else is pending work
STATUS_COMPLETED = "completed"

# GitHub answers a successful cancel request with 202 Accepted
CANCEL_ACCEPTED_STATUS = 202

# Per-call timeout in seconds
REQUEST_TIMEOUT = 60.0
