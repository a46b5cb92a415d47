import pytest

from commit_critic.models import CommitEvaluation, CommitRecord
from commit_critic.report import DEFAULT_CHANGES, is_one_word_commit, propose, summarize


@pytest.fixture
def scored():
    commits = [
        CommitRecord("a", "fix"),
        CommitRecord("b", "feat(auth): add refresh tokens"),
        CommitRecord("c", "fix(db): close pooled connections on shutdown\n\nLeaked under load."),
    ]
    evaluations = [
        CommitEvaluation(index=0, good=False, score=2, is_vague=True),
        CommitEvaluation(index=1, good=True, score=8, is_vague=False),
        CommitEvaluation(index=2, good=True, score=10, is_vague=False),
    ]
    return commits, evaluations


def test_summary_statistics(scored):
    report = summarize(*scored)
    assert report.total == 3
    assert report.average_score == pytest.approx(20 / 3)
    assert report.vague_count == 1
    assert round(report.vague_pct, 1) == 33.3
    assert report.one_word_count == 1
    assert round(report.one_word_pct, 1) == 33.3


def test_partition_pairs_commits(scored):
    commits, _ = scored
    report = summarize(*scored)
    assert [c for c, _ in report.needs_work] == [commits[0]]
    assert [c for c, _ in report.well_written] == [commits[1], commits[2]]


def test_empty_summary():
    report = summarize([], [])
    assert report.total == 0
    assert report.average_score == 0
    assert report.vague_pct == 0
    assert report.one_word_pct == 0
    assert report.needs_work == []
    assert report.well_written == []


def test_unmatched_index_counted_but_not_paired():
    commits = [CommitRecord("a", "docs: fix typo in README")]
    evaluations = [
        CommitEvaluation(index=0, good=True, score=8),
        CommitEvaluation(index=5, good=False, score=2),
    ]
    report = summarize(commits, evaluations)
    assert report.total == 2
    assert len(report.well_written) == 1
    assert report.needs_work == []
    assert report.average_score == 5


@pytest.mark.parametrize("message, expected", [
    ("", True),
    ("   ", True),
    ("wip", True),
    ("  fixed  \n", True),
    ("fixed bug", False),
    ("feat: x", False),
])
def test_is_one_word_commit(message, expected):
    assert is_one_word_commit(message) is expected


def test_propose_defaults():
    proposal = propose(CommitEvaluation.fallback(0))
    assert proposal.changes_summary == [DEFAULT_CHANGES]
    assert proposal.suggestion == ""


def test_propose_keeps_bullets():
    e = CommitEvaluation(index=0, good=False, score=3, better="fix: x", changes_summary=("a", "b"))
    proposal = propose(e)
    assert proposal.changes_summary == ["a", "b"]
    assert proposal.suggestion == "fix: x"
