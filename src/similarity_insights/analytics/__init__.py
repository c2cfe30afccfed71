"""
Course analytics module.

Aggregates submissions into course-wide statistics, classifies each
student's citation quality and recommends prioritized interventions.
"""

from .aggregation import compute_course_analytics, find_common_sources
from .insights import (
    HeatmapRow,
    RedFlags,
    SourceTypeShare,
    citation_quality_heatmap,
    compare_students,
    course_stats,
    detect_red_flags,
    source_type_breakdown,
    summarize_queue,
)
from .interventions import determine_priority, generate_intervention_recommendations
from .models import (
    CitationPatterns,
    CitationQuality,
    CommonSource,
    CourseAnalytics,
    InterventionRecommendation,
    InterventionType,
    Priority,
    SimilarityBucket,
    SourceTypeTrends,
    StudentPattern,
)
from .patterns import analyze_student_pattern, analyze_student_patterns

__all__ = [
    "CitationPatterns",
    "CitationQuality",
    "CommonSource",
    "CourseAnalytics",
    "HeatmapRow",
    "InterventionRecommendation",
    "InterventionType",
    "Priority",
    "RedFlags",
    "SimilarityBucket",
    "SourceTypeShare",
    "SourceTypeTrends",
    "StudentPattern",
    "analyze_student_pattern",
    "analyze_student_patterns",
    "citation_quality_heatmap",
    "compare_students",
    "compute_course_analytics",
    "course_stats",
    "detect_red_flags",
    "determine_priority",
    "find_common_sources",
    "generate_intervention_recommendations",
    "source_type_breakdown",
    "summarize_queue",
]
