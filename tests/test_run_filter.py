"""
Run Filter Tests
================
Eligibility rules for cancelling stale workflow runs.
"""
import pytest

from run_canceller.agents.run_canceller import is_cancellable, select_runs_to_cancel
from run_canceller.models.run_identity import RunIdentity
from run_canceller.models.workflow_run import WorkflowRun


@pytest.fixture
def identity():
    return RunIdentity(branch="main", commit_sha="current-sha", run_number=10)


def make_run(run_id=1, status="in_progress", head_sha="old-sha", head_branch="main", run_number=5):
    return WorkflowRun(
        id=run_id,
        status=status,
        head_sha=head_sha,
        head_branch=head_branch,
        run_number=run_number,
    )


def test_pending_older_run_is_selected(identity):
    assert is_cancellable(make_run(), identity) is True


@pytest.mark.parametrize("status", ["queued", "in_progress", "waiting", "requested", "pending"])
def test_non_completed_statuses_are_candidates(identity, status):
    assert is_cancellable(make_run(status=status), identity) is True


def test_completed_run_is_never_selected(identity):
    assert is_cancellable(make_run(status="completed"), identity) is False


def test_run_on_current_commit_is_never_selected(identity):
    """Never cancel ourselves, even when everything else matches."""
    run = make_run(head_sha="current-sha", run_number=1)
    assert is_cancellable(run, identity) is False


@pytest.mark.parametrize("branch", ["develop", "main2", "", None])
def test_run_on_other_branch_is_never_selected(identity, branch):
    assert is_cancellable(make_run(head_branch=branch), identity) is False


def test_newer_run_is_left_alone(identity):
    assert is_cancellable(make_run(run_number=11), identity) is False


def test_run_with_same_number_is_selected(identity):
    assert is_cancellable(make_run(run_number=10), identity) is True


def test_unknown_run_number_disables_upper_bound():
    identity = RunIdentity(branch="main", commit_sha="current-sha", run_number=0)
    run = make_run(status="in_progress", head_sha="other", head_branch="main", run_number=999)
    assert is_cancellable(run, identity) is True


def test_mixed_listing_selects_only_stale_run():
    identity = RunIdentity(branch="main", commit_sha="same-as-current", run_number=6)
    runs = [
        WorkflowRun(id=1, status="completed", run_number=5),
        WorkflowRun(id=2, status="in_progress", head_sha="abc", head_branch="main", run_number=3),
        WorkflowRun(id=3, status="queued", head_sha="same-as-current", head_branch="main", run_number=4),
    ]

    selected = select_runs_to_cancel(runs, identity)

    assert [r.id for r in selected] == [2]


def test_selection_preserves_listing_order(identity):
    runs = [make_run(run_id=i, run_number=i) for i in (7, 3, 9, 1)]
    assert [r.id for r in select_runs_to_cancel(runs, identity)] == [7, 3, 9, 1]


def test_empty_listing_selects_nothing(identity):
    assert select_runs_to_cancel([], identity) == []
