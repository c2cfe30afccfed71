"""Intervention recommendations built from student patterns."""

from collections.abc import Sequence

from ..utils.logging import get_logger
from .models import (
    CitationQuality,
    InterventionRecommendation,
    InterventionType,
    Priority,
    StudentPattern,
)

logger = get_logger(__name__)


def _format_percent(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:g}%"


def determine_priority(student: StudentPattern) -> Priority:
    """Priority of a student's intervention."""
    if (
        student.similarity > 50
        or student.integrity_issues_count > 2
        or student.citation_quality is CitationQuality.CONCERNING
    ):
        return Priority.HIGH
    if student.similarity > 40 or student.integrity_issues_count > 0:
        return Priority.MEDIUM
    return Priority.LOW


def describe_intervention(student: StudentPattern) -> tuple[str, str]:
    """
    Build the action and rationale text for a student's intervention.

    Args:
        student: Pattern with a suggested intervention

    Returns:
        Tuple of (action, rationale)
    """
    name = student.student_name
    intervention = student.suggested_intervention

    if intervention is InterventionType.ACADEMIC_INTEGRITY_MEETING:
        return (
            "Schedule one-on-one meeting to discuss academic integrity",
            f"{name} has {student.integrity_issues_count} academic integrity issues, "
            f"including {', '.join(student.issues)}. A direct conversation is recommended.",
        )
    if intervention is InterventionType.CITATION_TRAINING:
        return (
            "Provide citation training resources or workshop invitation",
            f"{name} shows a pattern of uncited sources "
            f"({_format_percent(student.largest_uncited_source)} largest uncited match). "
            "Citation skills training would help.",
        )
    if intervention is InterventionType.WRITING_SUPPORT:
        return (
            "Refer to writing center for support with paraphrasing and synthesis",
            f"{name}'s submission has {_format_percent(student.similarity)} similarity, "
            "suggesting difficulty with paraphrasing and synthesizing sources effectively.",
        )
    if intervention is InterventionType.FOLLOW_UP:
        return (
            "Send follow-up email with feedback on citation practices",
            f"{name} has minor citation issues that can be addressed with written "
            "feedback and encouragement.",
        )
    return (
        "Review submission for potential issues",
        "Submission flagged for review based on similarity patterns.",
    )


def generate_intervention_recommendations(
    patterns: Sequence[StudentPattern],
) -> list[InterventionRecommendation]:
    """
    Turn flagged student patterns into prioritized recommendations.

    Only patterns needing intervention produce a recommendation. The result is
    stably sorted by priority, so students sharing a priority keep their input
    order.

    Args:
        patterns: Student patterns in submission order

    Returns:
        Recommendations, high priority first
    """
    recommendations = []
    for student in patterns:
        if not student.needs_intervention:
            continue
        action, rationale = describe_intervention(student)
        recommendations.append(
            InterventionRecommendation(
                student=student,
                priority=determine_priority(student),
                action=action,
                rationale=rationale,
            )
        )

    recommendations.sort(key=lambda r: r.priority.rank)
    logger.debug(f"Generated {len(recommendations)} intervention recommendations")
    return recommendations
