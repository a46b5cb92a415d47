from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

STAGED_ID = "staged"
FALLBACK_ISSUE = "Could not parse evaluation"


@dataclass(frozen=True)
class CommitRecord:
    identifier: str
    message: str
    diff: str = ""

    @property
    def is_staged(self) -> bool:
        return self.identifier == STAGED_ID


class EvaluationMode(Enum):
    MESSAGE_ONLY = "message-only"
    MESSAGE_AND_DIFF = "message-and-diff"

    @property
    def includes_diff(self) -> bool:
        return self is EvaluationMode.MESSAGE_AND_DIFF


@dataclass(frozen=True)
class CommitEvaluation:
    index: int
    good: bool
    score: int
    is_vague: Optional[bool] = None
    issue: Optional[str] = None
    better: Optional[str] = None
    changes_summary: Optional[tuple[str, ...]] = None

    @property
    def vague(self) -> bool:
        """Explicit isVague from the model wins, otherwise derive it from the score."""
        if self.is_vague is not None:
            return self.is_vague
        return self.score <= 4 or not self.good

    @classmethod
    def fallback(cls, index: int) -> "CommitEvaluation":
        return cls(index=index, good=False, score=5, issue=FALLBACK_ISSUE)


@dataclass
class Report:
    total: int = 0
    average_score: float = 0.0
    vague_count: int = 0
    vague_pct: float = 0.0
    one_word_count: int = 0
    one_word_pct: float = 0.0
    needs_work: list = field(default_factory=list)
    well_written: list = field(default_factory=list)


@dataclass
class Proposal:
    changes_summary: list[str]
    suggestion: str = ""
