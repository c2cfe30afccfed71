"""Per-student citation quality and intervention analysis."""

from collections.abc import Sequence

from ..submissions.models import SubmissionRecord
from ..utils.logging import get_logger
from .models import CitationQuality, InterventionType, StudentPattern

logger = get_logger(__name__)

GENERIC_ISSUE = "Academic integrity concern"

INTERVENTION_SIMILARITY_THRESHOLD = 40
WRITING_SUPPORT_SIMILARITY_THRESHOLD = 50
LARGE_UNCITED_SOURCE_THRESHOLD = 20
MINOR_UNCITED_SOURCE_THRESHOLD = 15


def classify_citation_quality(
    citation_rate: float,
    integrity_issues: int,
    largest_uncited: float | None,
) -> CitationQuality:
    """Classify citation quality; the first matching rule wins."""
    if citation_rate >= 0.8 and integrity_issues == 0:
        return CitationQuality.GOOD
    if citation_rate >= 0.5 or (
        integrity_issues == 1
        and largest_uncited is not None
        and largest_uncited < MINOR_UNCITED_SOURCE_THRESHOLD
    ):
        return CitationQuality.NEEDS_IMPROVEMENT
    return CitationQuality.CONCERNING


def analyze_student_pattern(submission: SubmissionRecord) -> StudentPattern:
    """
    Assess one submission's citation quality and need for intervention.

    Args:
        submission: Submission with its match cards

    Returns:
        StudentPattern for the submission
    """
    issues: list[str] = []
    integrity_issues = 0
    uncited_sources = 0
    largest_uncited: float | None = None

    for card in submission.match_cards:
        if card.academic_integrity_issue:
            integrity_issues += 1
            issues.append(card.issue_description or GENERIC_ISSUE)

        if card.is_material_uncited:
            uncited_sources += 1
            if largest_uncited is None or card.similarity_percent > largest_uncited:
                largest_uncited = card.similarity_percent

    total_sources = len(submission.match_cards)
    citation_rate = (
        (total_sources - uncited_sources) / total_sources if total_sources > 0 else 1.0
    )
    quality = classify_citation_quality(citation_rate, integrity_issues, largest_uncited)

    similarity = submission.similarity
    needs_intervention = (
        similarity > INTERVENTION_SIMILARITY_THRESHOLD
        or integrity_issues > 1
        or (largest_uncited is not None and largest_uncited > LARGE_UNCITED_SOURCE_THRESHOLD)
        or quality is CitationQuality.CONCERNING
    )

    suggested = None
    if needs_intervention:
        if quality is CitationQuality.CONCERNING and integrity_issues > 1:
            suggested = InterventionType.ACADEMIC_INTEGRITY_MEETING
        elif uncited_sources > 2:
            suggested = InterventionType.CITATION_TRAINING
        elif similarity > WRITING_SUPPORT_SIMILARITY_THRESHOLD:
            suggested = InterventionType.WRITING_SUPPORT
        else:
            suggested = InterventionType.FOLLOW_UP

    return StudentPattern(
        document_id=submission.id,
        student_name=submission.author,
        submission_title=submission.title,
        similarity=similarity,
        integrity_issues_count=integrity_issues,
        largest_uncited_source=largest_uncited,
        citation_quality=quality,
        needs_intervention=needs_intervention,
        suggested_intervention=suggested,
        issues=issues,
        date_added=submission.submitted_at,
    )


def analyze_student_patterns(submissions: Sequence[SubmissionRecord]) -> list[StudentPattern]:
    """Analyze every submission independently, preserving input order."""
    patterns = [analyze_student_pattern(s) for s in submissions]
    logger.debug(
        f"Analyzed {len(patterns)} submissions, "
        f"{sum(1 for p in patterns if p.needs_intervention)} need intervention"
    )
    return patterns
