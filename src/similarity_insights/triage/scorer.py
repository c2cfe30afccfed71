"""
Worklist triage scoring.

Ranks submissions for grading by a transparent weighted score made of
flag, AI writing, similarity, grading status and recency terms.
"""

import math
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timezone

from ..config.models import ScoringWeights
from ..submissions.models import SubmissionRecord, parse_timestamp
from ..utils.logging import get_logger
from .models import PriorityRankingEntry

logger = get_logger(__name__)

DEFAULT_LIMIT = 50
SECONDS_PER_DAY = 24 * 60 * 60


def _resolve_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def days_since(timestamp: str | None, now: datetime) -> float:
    """Whole days elapsed since a timestamp, clamped to zero.

    Missing or unparsable timestamps are infinitely old.
    """
    submitted = parse_timestamp(timestamp)
    if submitted is None:
        return math.inf
    elapsed = (now - submitted).total_seconds()
    return max(0, math.floor(elapsed / SECONDS_PER_DAY))


def recency_bonus(age_days: float, weights: ScoringWeights) -> float:
    """Linear decay from the maximum bonus at age zero down to zero."""
    if math.isinf(age_days):
        return 0.0
    decayed = math.floor(age_days / weights.recency_decay_days * weights.recency_max_bonus)
    return max(0.0, weights.recency_max_bonus - decayed)


def score_submission(
    submission: SubmissionRecord,
    weights: ScoringWeights | None = None,
    now: datetime | None = None,
) -> PriorityRankingEntry:
    """
    Score one submission without ranking it.

    Args:
        submission: Submission to score
        weights: Scoring weights (defaults when omitted)
        now: Reference time for recency

    Returns:
        Entry with ``priority_rank`` 0 and the full score breakdown
    """
    weights = weights or ScoringWeights()
    now = _resolve_now(now)

    flag_points = submission.flag_count * weights.flag_weight

    ai = submission.ai_writing_percent
    ai_points = 0.0
    if ai is not None:
        ai_points = weights.ai_high_bonus if ai >= weights.ai_high_threshold else ai * weights.ai_factor

    sim = submission.similarity_percent
    similarity_points = 0.0
    if sim is not None:
        similarity_points = sim * weights.sim_factor
        if sim >= weights.sim_high_bonus_threshold:
            similarity_points += weights.sim_high_bonus

    ungraded_points = 0.0 if submission.is_graded else weights.ungraded_bonus

    age_days = days_since(submission.submitted_at, now)
    recency_points = recency_bonus(age_days, weights)

    return PriorityRankingEntry(
        submission_id=submission.id,
        title=submission.title,
        author=submission.author,
        raw_score=flag_points + ai_points + similarity_points + ungraded_points + recency_points,
        priority_rank=0,
        similarity=sim,
        ai_writing=ai,
        flags=submission.flag_count,
        graded=submission.is_graded,
        age_days=age_days,
        submitted_at=submission.submitted_at,
        flag_points=flag_points,
        ai_points=ai_points,
        similarity_points=similarity_points,
        ungraded_points=ungraded_points,
        recency_points=recency_points,
    )


def _tie_break_time(entry: PriorityRankingEntry) -> float:
    submitted = parse_timestamp(entry.submitted_at)
    return submitted.timestamp() if submitted else -math.inf


def rank_submissions(
    submissions: Sequence[SubmissionRecord],
    weights: ScoringWeights | None = None,
    *,
    limit: int | None = DEFAULT_LIMIT,
    now: datetime | None = None,
) -> list[PriorityRankingEntry]:
    """
    Rank submissions for the grading worklist.

    Sorted by score descending, then by submission time (newest first, with
    unparsable times last), then by input order.

    Args:
        submissions: Submissions to rank
        weights: Scoring weights (defaults when omitted)
        limit: Keep only the top N entries; None keeps all
        now: Reference time for recency, fixed for the whole call

    Returns:
        Ranked entries with 1-based ``priority_rank``
    """
    weights = weights or ScoringWeights()
    now = _resolve_now(now)

    scored = [score_submission(s, weights, now) for s in submissions]
    scored.sort(key=lambda e: (e.raw_score, _tie_break_time(e)), reverse=True)

    ranked = [replace(entry, priority_rank=i) for i, entry in enumerate(scored, start=1)]
    if limit is not None:
        ranked = ranked[:limit]

    logger.debug(f"Ranked {len(scored)} submissions, returning {len(ranked)}")
    return ranked
