from __future__ import annotations

from conftest import make_card, make_submission
from similarity_insights.analytics import (
    Priority,
    analyze_student_pattern,
    analyze_student_patterns,
    determine_priority,
    generate_intervention_recommendations,
)


def _low_priority_submission(submission_id: str):
    # One large uncited source among well cited ones: good quality, still flagged.
    cards = [make_card("Big", 25, cited=False)] + [make_card(f"c{i}", 2) for i in range(4)]
    return make_submission(submission_id, 30, cards, author=f"Student {submission_id}")


def test_course_scenario_recommendations(course_submissions) -> None:
    recommendations = generate_intervention_recommendations(
        analyze_student_patterns(course_submissions)
    )

    assert len(recommendations) == 1
    [rec] = recommendations
    assert rec.student.document_id == "doc2"
    assert rec.priority is Priority.HIGH
    assert rec.action == "Schedule one-on-one meeting to discuss academic integrity"
    assert rec.rationale == (
        "Bob Student has 2 academic integrity issues, including Large uncited block, "
        "Match to student work. A direct conversation is recommended."
    )


def test_priority_levels() -> None:
    high = analyze_student_pattern(make_submission("h", 55, [make_card("Book", 10)]))
    medium = analyze_student_pattern(make_submission("m", 45, [make_card("Book", 10)]))
    low = analyze_student_pattern(_low_priority_submission("l"))

    assert determine_priority(high) is Priority.HIGH
    assert determine_priority(medium) is Priority.MEDIUM
    assert determine_priority(low) is Priority.LOW


def test_integrity_issue_raises_priority_to_medium() -> None:
    cards = [make_card("Blog", 10, cited=False, issue=True)]
    pattern = analyze_student_pattern(make_submission("a", 12, cards))

    assert determine_priority(pattern) is Priority.MEDIUM


def test_only_flagged_students_are_recommended() -> None:
    patterns = analyze_student_patterns(
        [
            make_submission("ok", 10, [make_card("Book", 5)]),
            make_submission("flagged", 45, [make_card("Book", 5)]),
        ]
    )
    recommendations = generate_intervention_recommendations(patterns)

    assert [r.student.document_id for r in recommendations] == ["flagged"]


def test_recommendations_sorted_by_priority_and_stable() -> None:
    submissions = [
        _low_priority_submission("low1"),
        make_submission("med1", 45, [make_card("Book", 5)]),
        make_submission("high1", 60, [make_card("Book", 5)]),
        _low_priority_submission("low2"),
        make_submission("high2", 70, [make_card("Book", 5)]),
        make_submission("med2", 42, [make_card("Book", 5)]),
    ]
    recommendations = generate_intervention_recommendations(analyze_student_patterns(submissions))

    assert [r.student.document_id for r in recommendations] == [
        "high1",
        "high2",
        "med1",
        "med2",
        "low1",
        "low2",
    ]
    priorities = [r.priority.rank for r in recommendations]
    assert priorities == sorted(priorities)


def test_action_texts() -> None:
    training = analyze_student_pattern(
        make_submission("t", 30, [make_card(f"s{i}", 12, cited=False) for i in range(3)], author="Tia")
    )
    writing = analyze_student_pattern(make_submission("w", 55, [make_card("Book", 5)], author="Wes"))
    follow_up = analyze_student_pattern(make_submission("f", 45, [make_card("Book", 5)], author="Fay"))

    recs = {
        r.student.document_id: r
        for r in generate_intervention_recommendations([training, writing, follow_up])
    }

    assert recs["t"].action == "Provide citation training resources or workshop invitation"
    assert recs["t"].rationale.startswith("Tia shows a pattern of uncited sources (12% largest")
    assert recs["w"].action == (
        "Refer to writing center for support with paraphrasing and synthesis"
    )
    assert recs["w"].rationale.startswith("Wes's submission has 55% similarity")
    assert recs["f"].action == "Send follow-up email with feedback on citation practices"
    assert "Fay has minor citation issues" in recs["f"].rationale


def test_empty_input() -> None:
    assert generate_intervention_recommendations([]) == []


def test_recommendation_to_dict(course_submissions) -> None:
    [rec] = generate_intervention_recommendations(analyze_student_patterns(course_submissions))
    data = rec.to_dict()

    assert data["priority"] == "high"
    assert data["student"]["documentId"] == "doc2"
    assert data["action"] == rec.action
