from __future__ import annotations

from conftest import make_card, make_submission
from similarity_insights.analytics import (
    CitationQuality,
    InterventionType,
    analyze_student_pattern,
    analyze_student_patterns,
)
from similarity_insights.analytics.patterns import GENERIC_ISSUE, classify_citation_quality


def test_course_scenario_patterns(course_submissions) -> None:
    doc1, doc2, doc3 = analyze_student_patterns(course_submissions)

    assert doc1.citation_quality is CitationQuality.GOOD
    assert not doc1.needs_intervention
    assert doc1.suggested_intervention is None

    assert doc2.document_id == "doc2"
    assert doc2.student_name == "Bob Student"
    assert doc2.submission_title == "Test Paper 2"
    assert doc2.integrity_issues_count == 2
    assert doc2.largest_uncited_source == 25
    assert doc2.citation_quality is CitationQuality.CONCERNING
    assert doc2.needs_intervention
    assert doc2.suggested_intervention is InterventionType.ACADEMIC_INTEGRITY_MEETING
    assert doc2.issues == ["Large uncited block", "Match to student work"]
    assert doc2.date_added == "2025-10-02"

    assert doc3.citation_quality is CitationQuality.GOOD
    assert not doc3.needs_intervention


def test_submission_without_cards_is_good() -> None:
    pattern = analyze_student_pattern(make_submission("a", 12, []))

    assert pattern.citation_quality is CitationQuality.GOOD
    assert pattern.largest_uncited_source is None
    assert pattern.issues == []
    assert not pattern.needs_intervention


def test_single_small_issue_is_needs_improvement() -> None:
    card = make_card("Blog", 10, cited=False, issue=True)
    pattern = analyze_student_pattern(make_submission("a", 12, [card]))

    assert pattern.citation_quality is CitationQuality.NEEDS_IMPROVEMENT
    assert not pattern.needs_intervention


def test_uncited_source_without_issue_is_concerning() -> None:
    card = make_card("Blog", 10, cited=False)
    pattern = analyze_student_pattern(make_submission("a", 12, [card]))

    assert pattern.citation_quality is CitationQuality.CONCERNING
    assert pattern.needs_intervention
    assert pattern.suggested_intervention is InterventionType.FOLLOW_UP


def test_classify_citation_quality_rules() -> None:
    assert classify_citation_quality(1.0, 0, None) is CitationQuality.GOOD
    assert classify_citation_quality(0.8, 0, None) is CitationQuality.GOOD
    assert classify_citation_quality(0.9, 1, 10) is CitationQuality.NEEDS_IMPROVEMENT
    assert classify_citation_quality(0.5, 3, 30) is CitationQuality.NEEDS_IMPROVEMENT
    assert classify_citation_quality(0.0, 1, 14.9) is CitationQuality.NEEDS_IMPROVEMENT
    assert classify_citation_quality(0.0, 1, 15) is CitationQuality.CONCERNING
    assert classify_citation_quality(0.0, 1, None) is CitationQuality.CONCERNING
    assert classify_citation_quality(0.4, 0, 8) is CitationQuality.CONCERNING


def test_many_uncited_sources_suggest_citation_training() -> None:
    cards = [make_card(f"src{i}", 10, cited=False) for i in range(3)]
    pattern = analyze_student_pattern(make_submission("a", 30, cards))

    assert pattern.citation_quality is CitationQuality.CONCERNING
    assert pattern.suggested_intervention is InterventionType.CITATION_TRAINING
    assert pattern.largest_uncited_source == 10


def test_high_similarity_suggests_writing_support() -> None:
    pattern = analyze_student_pattern(make_submission("a", 55, [make_card("Book", 30)]))

    assert pattern.citation_quality is CitationQuality.GOOD
    assert pattern.needs_intervention
    assert pattern.suggested_intervention is InterventionType.WRITING_SUPPORT


def test_moderate_similarity_suggests_follow_up() -> None:
    pattern = analyze_student_pattern(make_submission("a", 45, [make_card("Book", 30)]))

    assert pattern.needs_intervention
    assert pattern.suggested_intervention is InterventionType.FOLLOW_UP


def test_similarity_at_threshold_does_not_need_intervention() -> None:
    pattern = analyze_student_pattern(make_submission("a", 40, [make_card("Book", 30)]))
    assert not pattern.needs_intervention


def test_large_uncited_source_needs_intervention() -> None:
    cards = [make_card("Big", 21, cited=False)] + [make_card(f"c{i}", 2) for i in range(4)]
    pattern = analyze_student_pattern(make_submission("a", 30, cards))

    assert pattern.citation_quality is CitationQuality.GOOD
    assert pattern.largest_uncited_source == 21
    assert pattern.needs_intervention


def test_uncited_at_five_percent_is_not_material() -> None:
    pattern = analyze_student_pattern(make_submission("a", 10, [make_card("Tiny", 5, cited=False)]))

    assert pattern.largest_uncited_source is None
    assert pattern.citation_quality is CitationQuality.GOOD


def test_issue_without_description_uses_generic_text() -> None:
    cards = [
        make_card("a", 3, issue=True),
        make_card("b", 3, issue=True, description="Copied abstract"),
    ]
    pattern = analyze_student_pattern(make_submission("x", 10, cards))

    assert pattern.issues == [GENERIC_ISSUE, "Copied abstract"]


def test_patterns_follow_input_order(course_submissions) -> None:
    reordered = list(reversed(course_submissions))
    ids = [p.document_id for p in analyze_student_patterns(reordered)]

    assert ids == ["doc3", "doc2", "doc1"]


def test_pattern_to_dict(course_submissions) -> None:
    data = analyze_student_pattern(course_submissions[1]).to_dict()

    assert data["citationQuality"] == "concerning"
    assert data["suggestedIntervention"] == "academic_integrity_meeting"
    assert data["needsIntervention"] is True
    assert data["largestUncitedSource"] == 25
