"""Inbox summary metrics over raw submissions."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone

from ..submissions.models import SubmissionRecord

RECENT_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class InboxMetrics:
    """Counts shown above the submission inbox."""

    total: int = 0
    graded: int = 0
    ungraded: int = 0
    high_similarity: int = 0
    medium_similarity: int = 0
    low_similarity: int = 0
    recent_submissions: int = 0
    avg_similarity: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def inbox_metrics(
    submissions: Sequence[SubmissionRecord],
    now: datetime | None = None,
) -> InboxMetrics:
    """
    Summarize grading progress and similarity bands for the inbox.

    Submissions without a similarity score fall in the low band and count as
    zero in the average. Unparsable submission times are never recent.

    Args:
        submissions: Submissions in the inbox
        now: Reference time for the recent window

    Returns:
        InboxMetrics
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - RECENT_WINDOW

    total = len(submissions)
    graded = sum(1 for s in submissions if s.is_graded)
    similarities = [s.similarity_percent for s in submissions]

    recent = 0
    for s in submissions:
        submitted = s.submitted_datetime
        if submitted is not None and submitted >= cutoff:
            recent += 1

    return InboxMetrics(
        total=total,
        graded=graded,
        ungraded=total - graded,
        high_similarity=sum(1 for v in similarities if v is not None and v > 40),
        medium_similarity=sum(1 for v in similarities if v is not None and 20 <= v <= 40),
        low_similarity=sum(1 for v in similarities if v is None or v < 20),
        recent_submissions=recent,
        avg_similarity=(
            round(sum(v or 0.0 for v in similarities) / total, 1) if total > 0 else 0.0
        ),
    )
