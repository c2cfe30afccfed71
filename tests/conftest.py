"""Shared fixtures and record builders for the test suite."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from similarity_insights.submissions import (
    CitationStatus,
    MatchCardRecord,
    SourceType,
    SubmissionRecord,
)

NOW = datetime(2025, 10, 10, 12, 0, tzinfo=timezone.utc)


def make_card(
    source_name: str = "Wikipedia - Climate Change",
    similarity: float = 10,
    cited: bool = True,
    status: CitationStatus | None = None,
    source_type: SourceType = SourceType.INTERNET,
    issue: bool = False,
    description: str | None = None,
) -> MatchCardRecord:
    if status is None:
        status = CitationStatus.PROPERLY_CITED if cited else CitationStatus.NOT_CITED
    return MatchCardRecord(
        source_name=source_name,
        source_type=source_type,
        similarity_percent=similarity,
        is_cited=cited,
        citation_status=status,
        academic_integrity_issue=issue,
        issue_description=description,
    )


def make_submission(
    submission_id: str = "doc",
    similarity: float | None = 10,
    cards: list[MatchCardRecord] | None = None,
    author: str = "Test Student",
    title: str = "Test Paper",
    submitted_at: str | None = "2025-10-01",
    **kwargs: Any,
) -> SubmissionRecord:
    return SubmissionRecord(
        id=submission_id,
        title=title,
        author=author,
        similarity_percent=similarity,
        submitted_at=submitted_at,
        match_cards=tuple(cards or ()),
        **kwargs,
    )


@pytest.fixture
def course_submissions() -> list[SubmissionRecord]:
    """Three submissions at 25%, 45% and 12%; only the second has integrity issues."""
    return [
        make_submission(
            "doc1",
            25,
            [
                make_card("Wikipedia - Climate Change", 15),
                make_card("Nature Journal", 10, source_type=SourceType.PUBLICATION),
            ],
            author="Alice Student",
            title="Test Paper 1",
            submitted_at="2025-10-01",
        ),
        make_submission(
            "doc2",
            45,
            [
                make_card(
                    "Wikipedia - Climate Change",
                    25,
                    cited=False,
                    issue=True,
                    description="Large uncited block",
                ),
                make_card(
                    "Previous Student Paper",
                    20,
                    cited=False,
                    source_type=SourceType.SUBMITTED_WORK,
                    issue=True,
                    description="Match to student work",
                ),
            ],
            author="Bob Student",
            title="Test Paper 2",
            submitted_at="2025-10-02",
        ),
        make_submission(
            "doc3",
            12,
            [make_card("Science Magazine", 12, source_type=SourceType.PUBLICATION)],
            author="Carol Student",
            title="Test Paper 3",
            submitted_at="2025-10-03",
        ),
    ]


@pytest.fixture
def course_data_dir(tmp_path: Path) -> Path:
    """A course data directory in the folder listing + documents layout."""
    listing = [
        {
            "type": "folder",
            "name": "Essay 1",
            "children": [
                {
                    "type": "document",
                    "id": "doc1",
                    "title": "Listing Title 1",
                    "author": "Alice Student",
                    "similarity": 25,
                    "submittedAt": "2025-10-01T09:00:00Z",
                    "aiWriting": [10, 30],
                    "flags": 0,
                    "grade": 88,
                },
                {
                    "type": "folder",
                    "name": "Late",
                    "children": [
                        {
                            "type": "document",
                            "id": "doc2",
                            "title": "Test Paper 2",
                            "author": "Bob Student",
                            "similarity": 45,
                            "submittedAt": "2025-10-09T09:00:00Z",
                            "flags": 1,
                        }
                    ],
                },
            ],
        },
        {
            "type": "document",
            "id": "doc3",
            "title": "Test Paper 3",
            "author": "Carol Student",
            "similarity": 12,
            "submittedAt": "2025-10-03T09:00:00Z",
        },
    ]
    documents = {
        "doc1": {
            "title": "Test Paper 1",
            "author": "Alice Student",
            "matchCards": [
                {
                    "sourceName": "Wikipedia - Climate Change",
                    "sourceType": "Internet",
                    "similarityPercent": 15,
                    "isCited": True,
                    "citationStatus": "properly_cited",
                    "academicIntegrityIssue": False,
                },
            ],
        },
        "doc2": {
            "matchCards": [
                {
                    "sourceName": "Wikipedia - Climate Change",
                    "sourceType": "Internet",
                    "similarityPercent": 25,
                    "isCited": False,
                    "citationStatus": "not_cited",
                    "academicIntegrityIssue": True,
                    "issueDescription": "Large uncited block",
                },
                {
                    "sourceName": "Previous Student Paper",
                    "sourceType": "Submitted Works",
                    "similarityPercent": 20,
                    "isCited": False,
                    "citationStatus": "not_cited",
                    "academicIntegrityIssue": True,
                    "issueDescription": "Match to student work",
                },
            ],
        },
        "doc3": {
            "matchCards": [
                {
                    "sourceName": "Science Magazine",
                    "sourceType": "Publication",
                    "similarityPercent": 12,
                    "isCited": True,
                    "citationStatus": "properly_cited",
                    "academicIntegrityIssue": False,
                }
            ],
        },
    }

    (tmp_path / "documents").mkdir()
    (tmp_path / "folder_structure.json").write_text(json.dumps(listing), encoding="utf-8")
    for doc_id, payload in documents.items():
        (tmp_path / "documents" / f"{doc_id}.json").write_text(
            json.dumps(payload), encoding="utf-8"
        )
    return tmp_path
