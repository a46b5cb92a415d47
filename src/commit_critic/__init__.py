"""
AI Commit Message Critic — analyze commit quality & write better commits.
"""
from .analyzer import evaluate, evaluate_commits
from .models import CommitEvaluation, CommitRecord, EvaluationMode, Proposal, Report
from .report import propose, summarize

__all__ = [
    "CommitEvaluation",
    "CommitRecord",
    "EvaluationMode",
    "Proposal",
    "Report",
    "evaluate",
    "evaluate_commits",
    "propose",
    "summarize",
]
