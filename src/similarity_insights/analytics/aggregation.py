"""
Course-wide aggregation of submission similarity data.

Computes headline statistics, common sources, citation and source type
tallies and the similarity histogram for a snapshot of submissions.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..submissions.models import CitationStatus, SourceType, SubmissionRecord
from ..utils.logging import get_logger
from .models import (
    CitationPatterns,
    CommonSource,
    CourseAnalytics,
    SimilarityBucket,
    SourceTypeTrends,
)

logger = get_logger(__name__)

HIGH_RISK_THRESHOLD = 40
MAX_COMMON_SOURCES = 10

# (label, lower bound, upper bound, upper bound inclusive)
SIMILARITY_RANGES: tuple[tuple[str, float, float, bool], ...] = (
    ("0-10%", 0, 10, False),
    ("10-20%", 10, 20, False),
    ("20-30%", 20, 30, False),
    ("30-40%", 30, 40, False),
    ("40-50%", 40, 50, False),
    ("50%+", 50, 100, True),
)


@dataclass
class _SourceAccumulator:
    source_name: str
    source_type: SourceType
    submission_ids: list[str] = field(default_factory=list)
    similarities: list[float] = field(default_factory=list)
    cited_count: int = 0

    def add(self, submission_id: str, similarity: float, cited: bool) -> None:
        if submission_id not in self.submission_ids:
            self.submission_ids.append(submission_id)
        self.similarities.append(similarity)
        if cited:
            self.cited_count += 1

    def to_common_source(self) -> CommonSource:
        total = len(self.similarities)
        return CommonSource(
            source_name=self.source_name,
            source_type=self.source_type,
            occurrence_count=len(self.submission_ids),
            affected_submission_ids=list(self.submission_ids),
            average_similarity=sum(self.similarities) / total,
            typically_cited=self.cited_count / total > 0.5,
        )


def compute_course_analytics(submissions: Sequence[SubmissionRecord]) -> CourseAnalytics:
    """
    Compute course-wide analytics from a snapshot of submissions.

    Args:
        submissions: Submissions with their match cards

    Returns:
        CourseAnalytics; all zeros and empty lists for an empty snapshot
    """
    if not submissions:
        return CourseAnalytics()

    similarities = [s.similarity for s in submissions]
    total = len(similarities)

    analytics = CourseAnalytics(
        total_submissions=total,
        average_similarity=sum(similarities) / total,
        # Element at index n // 2 of the sorted list, not the two-value average.
        median_similarity=sorted(similarities)[total // 2],
        max_similarity=max(similarities),
        min_similarity=min(similarities),
        high_risk_count=sum(1 for s in similarities if s > HIGH_RISK_THRESHOLD),
        integrity_issues_count=sum(1 for s in submissions if s.has_integrity_issue),
        common_sources=find_common_sources(submissions),
        citation_patterns=tally_citation_patterns(submissions),
        source_type_trends=tally_source_types(submissions),
        similarity_distribution=similarity_distribution(similarities),
    )

    logger.debug(
        f"Course analytics: {total} submissions, "
        f"{analytics.citation_patterns.total} match cards, "
        f"{len(analytics.common_sources)} common sources"
    )
    return analytics


def find_common_sources(
    submissions: Sequence[SubmissionRecord],
    limit: int = MAX_COMMON_SOURCES,
) -> list[CommonSource]:
    """
    Find sources matched by more than one distinct submission.

    Args:
        submissions: Submissions to scan
        limit: Maximum number of sources returned

    Returns:
        Common sources, most widespread first; ties keep discovery order
    """
    groups: dict[str, _SourceAccumulator] = {}

    for submission in submissions:
        for card in submission.match_cards:
            group = groups.get(card.source_name)
            if group is None:
                group = _SourceAccumulator(card.source_name, card.source_type)
                groups[card.source_name] = group
            group.add(submission.id, card.similarity_percent, card.is_cited)

    common = [g.to_common_source() for g in groups.values() if len(g.submission_ids) > 1]
    common.sort(key=lambda s: s.occurrence_count, reverse=True)
    return common[:limit]


def tally_citation_patterns(submissions: Sequence[SubmissionRecord]) -> CitationPatterns:
    """Count every match card by citation status."""
    counts = {status: 0 for status in CitationStatus}
    for submission in submissions:
        for card in submission.match_cards:
            counts[card.citation_status] += 1

    properly = counts[CitationStatus.PROPERLY_CITED]
    total = sum(counts.values())

    return CitationPatterns(
        properly_cited=properly,
        improperly_cited=counts[CitationStatus.IMPROPERLY_CITED],
        uncited=counts[CitationStatus.NOT_CITED],
        total=total,
        proper_citation_rate=(properly / total * 100) if total > 0 else 0.0,
    )


def tally_source_types(submissions: Sequence[SubmissionRecord]) -> SourceTypeTrends:
    """Count every match card by source type."""
    counts = {source_type: 0 for source_type in SourceType}
    for submission in submissions:
        for card in submission.match_cards:
            counts[card.source_type] += 1

    return SourceTypeTrends(
        internet_sources=counts[SourceType.INTERNET],
        publication_sources=counts[SourceType.PUBLICATION],
        student_work_sources=counts[SourceType.SUBMITTED_WORK],
        total=sum(counts.values()),
    )


def similarity_distribution(similarities: Sequence[float]) -> list[SimilarityBucket]:
    """
    Bucket similarity scores into the fixed histogram ranges.

    Args:
        similarities: Top-level similarity per submission

    Returns:
        One bucket per range; empty list for no scores
    """
    total = len(similarities)
    if total == 0:
        return []

    buckets = []
    for label, low, high, inclusive in SIMILARITY_RANGES:
        count = sum(
            1 for s in similarities if low <= s and (s <= high if inclusive else s < high)
        )
        buckets.append(SimilarityBucket(range=label, count=count, percentage=count / total * 100))
    return buckets
