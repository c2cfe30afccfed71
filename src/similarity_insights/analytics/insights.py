"""
Dashboard insights derived from analytics and student patterns.

These are read-only views over already computed results: the citation
quality heatmap, red flag detection, the intervention queue summary, the
sortable student comparison table and the source type breakdown.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Callable

from ..submissions.models import parse_timestamp
from .models import (
    CitationQuality,
    CommonSource,
    CourseAnalytics,
    InterventionRecommendation,
    Priority,
    SourceTypeTrends,
    StudentPattern,
)

HEATMAP_RANGES: tuple[tuple[str, float, float, bool], ...] = (
    ("0-10%", 0, 10, False),
    ("10-20%", 10, 20, False),
    ("20-30%", 20, 30, False),
    ("30-40%", 30, 40, False),
    ("40%+", 40, 100, True),
)

WATCHLIST_LIMIT = 5
SUSPICIOUS_SOURCE_LIMIT = 3

RISK_FILTERS = ("all", "high", "medium", "low")

_CITATION_SCORE = {
    CitationQuality.GOOD: 3,
    CitationQuality.NEEDS_IMPROVEMENT: 2,
    CitationQuality.CONCERNING: 1,
}


def _date_key(pattern: StudentPattern) -> float:
    parsed = parse_timestamp(pattern.date_added)
    return parsed.timestamp() if parsed else float("-inf")


SORT_KEYS: dict[str, Callable[[StudentPattern], Any]] = {
    "name": lambda p: p.student_name.casefold(),
    "similarity": lambda p: p.similarity,
    "issues": lambda p: p.integrity_issues_count,
    "citation": lambda p: _CITATION_SCORE[p.citation_quality],
    "date": _date_key,
}


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------


@dataclass
class HeatmapRow:
    """Students in one similarity range, split by citation quality."""

    range: str
    good: int = 0
    needs_improvement: int = 0
    concerning: int = 0

    @property
    def total(self) -> int:
        return self.good + self.needs_improvement + self.concerning

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": self.range,
            "good": self.good,
            "needsImprovement": self.needs_improvement,
            "concerning": self.concerning,
            "total": self.total,
        }


@dataclass
class RedFlags:
    """Potential academic integrity concerns across the course."""

    watchlist: list[StudentPattern] = field(default_factory=list)
    suspicious_sources: list[CommonSource] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.watchlist) + len(self.suspicious_sources)

    def to_dict(self) -> dict[str, Any]:
        return {
            "watchlist": [p.to_dict() for p in self.watchlist],
            "suspiciousSources": [s.to_dict() for s in self.suspicious_sources],
            "total": self.total,
        }


@dataclass
class SourceTypeShare:
    """Share of match cards coming from one source type."""

    label: str
    count: int
    percentage: float


# -----------------------------------------------------------------------------
# Functions
# -----------------------------------------------------------------------------


def citation_quality_heatmap(patterns: Sequence[StudentPattern]) -> list[HeatmapRow]:
    """Cross-tabulate students by similarity range and citation quality."""
    rows = []
    for label, low, high, inclusive in HEATMAP_RANGES:
        row = HeatmapRow(range=label)
        for pattern in patterns:
            s = pattern.similarity
            if not (low <= s and (s <= high if inclusive else s < high)):
                continue
            if pattern.citation_quality is CitationQuality.GOOD:
                row.good += 1
            elif pattern.citation_quality is CitationQuality.NEEDS_IMPROVEMENT:
                row.needs_improvement += 1
            else:
                row.concerning += 1
        rows.append(row)
    return rows


def detect_red_flags(
    patterns: Sequence[StudentPattern],
    common_sources: Sequence[CommonSource],
) -> RedFlags:
    """
    Find students and shared sources that warrant a closer look.

    The watchlist holds students with more than two integrity issues or over
    50% similarity. Suspicious sources are shared by at least three students,
    usually left uncited, and contribute over 20% similarity on average.

    Args:
        patterns: Student patterns in submission order
        common_sources: Common sources from the course analytics

    Returns:
        RedFlags with capped lists in input order
    """
    watchlist = [
        p for p in patterns if p.integrity_issues_count > 2 or p.similarity > 50
    ][:WATCHLIST_LIMIT]

    suspicious = [
        s
        for s in common_sources
        if not s.typically_cited and s.occurrence_count >= 3 and s.average_similarity > 20
    ][:SUSPICIOUS_SOURCE_LIMIT]

    return RedFlags(watchlist=watchlist, suspicious_sources=suspicious)


def summarize_queue(recommendations: Sequence[InterventionRecommendation]) -> dict[Priority, int]:
    """Count recommendations per priority level."""
    counts = {priority: 0 for priority in Priority}
    for rec in recommendations:
        counts[rec.priority] += 1
    return counts


def _matches_risk(pattern: StudentPattern, risk_filter: str) -> bool:
    if risk_filter == "high":
        return pattern.similarity >= 40 or pattern.integrity_issues_count > 0
    if risk_filter == "medium":
        return 20 <= pattern.similarity < 40 and pattern.integrity_issues_count == 0
    if risk_filter == "low":
        return pattern.similarity < 20
    return True


def compare_students(
    patterns: Sequence[StudentPattern],
    sort_field: str = "similarity",
    descending: bool = True,
    risk_filter: str = "all",
) -> list[StudentPattern]:
    """
    Filter and sort student patterns for the comparison table.

    Args:
        patterns: Student patterns
        sort_field: One of name, similarity, issues, citation, date
        descending: Sort direction
        risk_filter: One of all, high, medium, low

    Returns:
        New list of matching patterns, stably sorted

    Raises:
        ValueError: If the sort field or risk filter is unknown
    """
    if sort_field not in SORT_KEYS:
        raise ValueError(f"Unknown sort field: {sort_field}")
    if risk_filter not in RISK_FILTERS:
        raise ValueError(f"Unknown risk filter: {risk_filter}")

    filtered = [p for p in patterns if _matches_risk(p, risk_filter)]
    return sorted(filtered, key=SORT_KEYS[sort_field], reverse=descending)


def source_type_breakdown(trends: SourceTypeTrends) -> list[SourceTypeShare]:
    """Share of each source type among all match cards."""
    entries = [
        ("Internet Sources", trends.internet_sources),
        ("Publications", trends.publication_sources),
        ("Student Work", trends.student_work_sources),
    ]
    return [
        SourceTypeShare(
            label=label,
            count=count,
            percentage=(count / trends.total * 100) if trends.total > 0 else 0.0,
        )
        for label, count in entries
    ]


def course_stats(analytics: CourseAnalytics | None) -> dict[str, float]:
    """Headline figures for the dashboard cards."""
    if analytics is None:
        analytics = CourseAnalytics()
    return {
        "totalSubmissions": analytics.total_submissions,
        "averageSimilarity": analytics.average_similarity,
        "highRiskCount": analytics.high_risk_count,
        "integrityIssuesCount": analytics.integrity_issues_count,
        "properCitationRate": analytics.citation_patterns.proper_citation_rate,
    }
