"""
Worklist triage module.

Scores and ranks submissions so the most urgent are graded first.
"""

from .metrics import InboxMetrics, inbox_metrics
from .models import PriorityRankingEntry
from .scorer import days_since, rank_submissions, recency_bonus, score_submission

__all__ = [
    "InboxMetrics",
    "PriorityRankingEntry",
    "days_since",
    "inbox_metrics",
    "rank_submissions",
    "recency_bonus",
    "score_submission",
]
