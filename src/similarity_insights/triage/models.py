"""Triage data models."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PriorityRankingEntry:
    """A submission's place in the grading worklist, with its score breakdown.

    ``raw_score`` is the sum of the ``*_points`` terms; ``priority_score`` is
    the same value rounded to one decimal for display.
    """

    submission_id: str
    title: str
    author: str
    raw_score: float
    priority_rank: int
    similarity: float | None
    ai_writing: float | None
    flags: int
    graded: bool
    age_days: float
    submitted_at: str | None
    flag_points: float = 0.0
    ai_points: float = 0.0
    similarity_points: float = 0.0
    ungraded_points: float = 0.0
    recency_points: float = 0.0

    @property
    def priority_score(self) -> float:
        return round(self.raw_score, 1)

    @property
    def breakdown(self) -> dict[str, float]:
        """Each score term by name."""
        return {
            "flags": self.flag_points,
            "aiWriting": self.ai_points,
            "similarity": self.similarity_points,
            "ungraded": self.ungraded_points,
            "recency": self.recency_points,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.submission_id,
            "title": self.title,
            "author": self.author,
            "similarity": self.similarity,
            "aiWriting": self.ai_writing,
            "flags": self.flags,
            "graded": self.graded,
            "ageDays": None if math.isinf(self.age_days) else self.age_days,
            "submittedAt": self.submitted_at,
            "priorityScore": self.priority_score,
            "priorityRank": self.priority_rank,
            "breakdown": self.breakdown,
        }
