"""Submission and match card data models."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

UNKNOWN_SOURCE_NAME = "Unknown Source"


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class RecordValidationError(ValueError):
    """A submission or match card record violates the input contract."""

    def __init__(self, message: str, record_id: str | None = None, field_name: str | None = None):
        self.record_id = record_id
        self.field_name = field_name
        location = []
        if record_id is not None:
            location.append(f"record '{record_id}'")
        if field_name is not None:
            location.append(f"field '{field_name}'")
        prefix = f"{', '.join(location)}: " if location else ""
        super().__init__(f"{prefix}{message}")


# -----------------------------------------------------------------------------
# Enumerations
# -----------------------------------------------------------------------------


class SourceType(Enum):
    """Kind of source a match card points at."""

    INTERNET = "Internet"
    PUBLICATION = "Publication"
    SUBMITTED_WORK = "Submitted Works"


class CitationStatus(Enum):
    """How a matched source was cited in the submission."""

    PROPERLY_CITED = "properly_cited"
    IMPROPERLY_CITED = "improperly_cited"
    NOT_CITED = "not_cited"


# -----------------------------------------------------------------------------
# Value parsing helpers
# -----------------------------------------------------------------------------


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are taken as UTC. Anything unparsable yields None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _number(value: Any) -> float | None:
    """Convert a number or numeric string to float, None if not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def to_scalar_percent(value: Any) -> float | None:
    """Reduce a percent value that may be a list of readings to one scalar.

    Lists use their maximum numeric element; non-numeric items are ignored.
    Returns None when nothing numeric is present.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        numbers = [n for n in (_number(item) for item in value) if n is not None]
        return max(numbers) if numbers else None
    return _number(value)


def _optional_bool(data: Mapping[str, Any], key: str, record_id: str | None) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise RecordValidationError(
            f"expected a boolean, got {type(value).__name__}", record_id, key
        )
    return value


def _flag_count(value: Any) -> int:
    """Flag count from a JSON number; fractional counts are truncated."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class MatchCardRecord:
    """One matched source found in a submission's similarity report."""

    source_name: str
    source_type: SourceType = SourceType.INTERNET
    similarity_percent: float = 0.0
    is_cited: bool = False
    citation_status: CitationStatus = CitationStatus.NOT_CITED
    academic_integrity_issue: bool = False
    issue_description: str | None = None

    @property
    def is_material_uncited(self) -> bool:
        """Uncited and above the 5% materiality floor."""
        return not self.is_cited and self.similarity_percent > 5

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], submission_id: str | None = None) -> "MatchCardRecord":
        """Create a MatchCardRecord from report JSON data.

        Args:
            data: Match card mapping using the report's camelCase keys
            submission_id: Owning submission, used in error messages

        Raises:
            RecordValidationError: If the card is not a mapping or carries
                an unknown enum value or a non-numeric similarity
        """
        if not isinstance(data, Mapping):
            raise RecordValidationError(
                f"match card must be an object, got {type(data).__name__}",
                submission_id,
                "matchCards",
            )

        raw_type = data.get("sourceType")
        try:
            source_type = SourceType(raw_type) if raw_type is not None else SourceType.INTERNET
        except ValueError:
            raise RecordValidationError(
                f"unknown source type {raw_type!r}", submission_id, "sourceType"
            ) from None

        raw_similarity = data.get("similarityPercent")
        similarity = _number(raw_similarity) if raw_similarity is not None else 0.0
        if similarity is None:
            raise RecordValidationError(
                f"similarity must be numeric, got {raw_similarity!r}",
                submission_id,
                "similarityPercent",
            )

        is_cited = _optional_bool(data, "isCited", submission_id)

        raw_status = data.get("citationStatus")
        if raw_status is None:
            citation_status = (
                CitationStatus.PROPERLY_CITED if is_cited else CitationStatus.NOT_CITED
            )
        else:
            try:
                citation_status = CitationStatus(raw_status)
            except ValueError:
                raise RecordValidationError(
                    f"unknown citation status {raw_status!r}", submission_id, "citationStatus"
                ) from None

        return cls(
            source_name=str(data.get("sourceName") or UNKNOWN_SOURCE_NAME),
            source_type=source_type,
            similarity_percent=similarity,
            is_cited=is_cited,
            citation_status=citation_status,
            academic_integrity_issue=_optional_bool(data, "academicIntegrityIssue", submission_id),
            issue_description=_optional_text(data.get("issueDescription")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceName": self.source_name,
            "sourceType": self.source_type.value,
            "similarityPercent": self.similarity_percent,
            "isCited": self.is_cited,
            "citationStatus": self.citation_status.value,
            "academicIntegrityIssue": self.academic_integrity_issue,
            "issueDescription": self.issue_description,
        }


@dataclass(frozen=True)
class SubmissionRecord:
    """A student's submission together with its match cards."""

    id: str
    title: str = ""
    author: str = ""
    similarity_percent: float | None = None
    submitted_at: str | None = None
    ai_writing_percent: float | None = None
    flag_count: int = 0
    grade: Any = None
    match_cards: tuple[MatchCardRecord, ...] = field(default_factory=tuple)

    @property
    def similarity(self) -> float:
        """Top-level similarity, 0 when the report has none."""
        return self.similarity_percent if self.similarity_percent is not None else 0.0

    @property
    def is_graded(self) -> bool:
        """Check if this submission has been graded."""
        return self.grade is not None

    @property
    def submitted_datetime(self) -> datetime | None:
        """Submission time as aware UTC datetime, None if absent or unparsable."""
        return parse_timestamp(self.submitted_at)

    @property
    def has_integrity_issue(self) -> bool:
        return any(card.academic_integrity_issue for card in self.match_cards)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SubmissionRecord":
        """Create a SubmissionRecord from submission JSON data.

        Accepts the inbox listing keys (``similarity``, ``submittedAt``,
        ``aiWriting``, ``flags``) as well as their long forms, and match cards
        either at the top level or under ``documentData``.

        Raises:
            RecordValidationError: If the record is structurally invalid
        """
        if not isinstance(data, Mapping):
            raise RecordValidationError(
                f"submission must be an object, got {type(data).__name__}"
            )

        raw_id = data.get("id")
        if raw_id is None or not str(raw_id).strip():
            raise RecordValidationError("missing required submission id", field_name="id")
        record_id = str(raw_id)

        raw_similarity = data.get("similarity", data.get("similarityPercent"))
        similarity = to_scalar_percent(raw_similarity)
        if similarity is None and raw_similarity is not None and not isinstance(raw_similarity, (list, tuple)):
            raise RecordValidationError(
                f"similarity must be numeric, got {raw_similarity!r}", record_id, "similarity"
            )

        flag_count = _flag_count(data.get("flags", data.get("flagCount")))

        submitted_at = data.get("submittedAt", data.get("dateAdded"))

        document = data.get("documentData")
        raw_cards = data.get("matchCards")
        if raw_cards is None and isinstance(document, Mapping):
            raw_cards = document.get("matchCards")
        if raw_cards is None:
            raw_cards = []
        if not isinstance(raw_cards, list):
            raise RecordValidationError(
                f"matchCards must be a list, got {type(raw_cards).__name__}",
                record_id,
                "matchCards",
            )

        return cls(
            id=record_id,
            title=str(data.get("title") or ""),
            author=str(data.get("author") or ""),
            similarity_percent=similarity,
            submitted_at=None if submitted_at is None else str(submitted_at),
            ai_writing_percent=to_scalar_percent(data.get("aiWriting", data.get("aiWritingPercent"))),
            flag_count=flag_count,
            grade=data.get("grade"),
            match_cards=tuple(MatchCardRecord.from_dict(card, record_id) for card in raw_cards),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "similarity": self.similarity_percent,
            "submittedAt": self.submitted_at,
            "aiWriting": self.ai_writing_percent,
            "flags": self.flag_count,
            "grade": self.grade,
            "matchCards": [card.to_dict() for card in self.match_cards],
        }


def parse_submissions(items: list[Mapping[str, Any]]) -> list[SubmissionRecord]:
    """Validate a list of raw submission mappings at the engine boundary."""
    return [SubmissionRecord.from_dict(item) for item in items]
