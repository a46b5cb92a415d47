from typing import Sequence

from .models import CommitEvaluation, CommitRecord, Proposal, Report

DEFAULT_CHANGES = "Staged changes"


def is_one_word_commit(message: str) -> bool:
    return len(message.split()) <= 1


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def summarize(commits: Sequence[CommitRecord], evaluations: Sequence[CommitEvaluation]) -> Report:
    """Split evaluations into needs-work / well-written and compute the stats.

    Evaluations are paired with their commit by index; an index with no
    source commit is left out of the pairs but still counted in the stats.
    """
    needs_work = []
    well_written = []
    for e in evaluations:
        if not 0 <= e.index < len(commits):
            continue
        pair = (commits[e.index], e)
        if e.good:
            well_written.append(pair)
        else:
            needs_work.append(pair)

    total = len(evaluations)
    vague_count = sum(1 for e in evaluations if e.vague)
    one_word_count = sum(1 for c in commits if is_one_word_commit(c.message))

    return Report(
        total=total,
        average_score=sum(e.score for e in evaluations) / total if total else 0.0,
        vague_count=vague_count,
        vague_pct=_pct(vague_count, total),
        one_word_count=one_word_count,
        one_word_pct=_pct(one_word_count, len(commits)),
        needs_work=needs_work,
        well_written=well_written,
    )


def propose(evaluation: CommitEvaluation) -> Proposal:
    """Resolve a write-mode evaluation into bullets plus a suggested message."""
    changes = list(evaluation.changes_summary) if evaluation.changes_summary else [DEFAULT_CHANGES]
    return Proposal(changes_summary=changes, suggestion=evaluation.better or "")
