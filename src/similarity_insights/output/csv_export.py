"""
CSV report export.

Formats course analytics, intervention recommendations and the triage
worklist as delimited text for download. No computation happens here.
"""

import csv
import io
from collections.abc import Iterable, Sequence
from typing import Any

from ..analytics.models import CourseAnalytics, InterventionRecommendation
from ..triage.models import PriorityRankingEntry


def _percent(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return ""
    return f"{value:.{decimals}f}%"


def _plain_percent(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:g}%"


class _SectionWriter:
    """Accumulates CSV sections separated by blank lines."""

    def __init__(self, delimiter: str):
        self._buffer = io.StringIO()
        self._writer = csv.writer(
            self._buffer,
            delimiter=delimiter,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )

    def row(self, *values: Any) -> None:
        self._writer.writerow(values)

    def rows(self, rows: Iterable[Sequence[Any]]) -> None:
        self._writer.writerows(rows)

    def blank(self) -> None:
        self._buffer.write("\n")

    def getvalue(self) -> str:
        return self._buffer.getvalue()


def export_analytics_csv(analytics: CourseAnalytics, delimiter: str = ",") -> str:
    """
    Export course analytics as a multi-section CSV document.

    Sections: summary metrics, common sources, citation patterns and the
    similarity distribution.

    Args:
        analytics: Computed course analytics
        delimiter: Field delimiter

    Returns:
        CSV text
    """
    out = _SectionWriter(delimiter)

    out.row("Course Analytics Summary")
    out.blank()

    out.row("Metric", "Value")
    out.row("Total Submissions", analytics.total_submissions)
    out.row("Average Similarity", _percent(analytics.average_similarity))
    out.row("Median Similarity", _plain_percent(analytics.median_similarity))
    out.row("High Risk Count (>40%)", analytics.high_risk_count)
    out.row("Integrity Issues", analytics.integrity_issues_count)
    out.blank()

    out.row("Common Sources Across Course")
    out.row("Source Name", "Source Type", "Student Count", "Avg Similarity")
    out.rows(
        (
            source.source_name,
            source.source_type.value,
            source.occurrence_count,
            _percent(source.average_similarity),
        )
        for source in analytics.common_sources
    )
    out.blank()

    patterns = analytics.citation_patterns
    out.row("Citation Patterns")
    out.row("Status", "Count")
    out.row("Properly Cited", patterns.properly_cited)
    out.row("Improperly Cited", patterns.improperly_cited)
    out.row("Not Cited", patterns.uncited)
    out.blank()

    out.row("Similarity Distribution")
    out.row("Range", "Count", "Percentage")
    out.rows(
        (bucket.range, bucket.count, _percent(bucket.percentage))
        for bucket in analytics.similarity_distribution
    )

    return out.getvalue()


def export_interventions_csv(
    recommendations: Sequence[InterventionRecommendation],
    delimiter: str = ",",
) -> str:
    """
    Export intervention recommendations as a CSV table.

    Args:
        recommendations: Prioritized recommendations
        delimiter: Field delimiter

    Returns:
        CSV text
    """
    out = _SectionWriter(delimiter)

    out.row("Student Intervention Recommendations")
    out.blank()
    out.row(
        "Priority",
        "Student Name",
        "Submission",
        "Similarity",
        "Issues",
        "Suggested Action",
        "Rationale",
    )
    for rec in recommendations:
        student = rec.student
        out.row(
            rec.priority.value,
            student.student_name,
            student.submission_title,
            _plain_percent(student.similarity),
            student.integrity_issues_count,
            rec.action,
            rec.rationale,
        )

    return out.getvalue()


def export_priority_ranking_csv(
    entries: Sequence[PriorityRankingEntry],
    delimiter: str = ",",
) -> str:
    """
    Export the triage worklist with every score term.

    Args:
        entries: Ranked entries
        delimiter: Field delimiter

    Returns:
        CSV text
    """
    out = _SectionWriter(delimiter)

    out.row("Grading Priority Queue")
    out.blank()
    out.row(
        "Rank",
        "Score",
        "Student Name",
        "Submission",
        "Similarity",
        "AI Writing",
        "Flags",
        "Graded",
        "Submitted At",
        "Flag Points",
        "AI Points",
        "Similarity Points",
        "Ungraded Points",
        "Recency Points",
    )
    for entry in entries:
        out.row(
            entry.priority_rank,
            f"{entry.priority_score:.1f}",
            entry.author,
            entry.title,
            _plain_percent(entry.similarity),
            _plain_percent(entry.ai_writing),
            entry.flags,
            "yes" if entry.graded else "no",
            entry.submitted_at or "",
            f"{entry.flag_points:g}",
            f"{entry.ai_points:g}",
            f"{entry.similarity_points:g}",
            f"{entry.ungraded_points:g}",
            f"{entry.recency_points:g}",
        )

    return out.getvalue()
