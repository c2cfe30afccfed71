"""Course analytics data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..submissions.models import SourceType


class CitationQuality(Enum):
    """How well a student cited the sources matched in a submission."""

    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    CONCERNING = "concerning"


class InterventionType(Enum):
    """Kind of follow-up suggested for a student."""

    CITATION_TRAINING = "citation_training"
    ACADEMIC_INTEGRITY_MEETING = "academic_integrity_meeting"
    WRITING_SUPPORT = "writing_support"
    FOLLOW_UP = "follow_up"


class Priority(Enum):
    """Urgency of an intervention recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort position, most urgent first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass
class CommonSource:
    """A source matched by more than one submission in the course."""

    source_name: str
    source_type: SourceType
    occurrence_count: int
    affected_submission_ids: list[str]
    average_similarity: float
    typically_cited: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceName": self.source_name,
            "sourceType": self.source_type.value,
            "occurrenceCount": self.occurrence_count,
            "affectedSubmissions": list(self.affected_submission_ids),
            "averageSimilarity": self.average_similarity,
            "typicallyCited": self.typically_cited,
        }


@dataclass
class CitationPatterns:
    """Citation status tally over every match card in the course."""

    properly_cited: int = 0
    improperly_cited: int = 0
    uncited: int = 0
    total: int = 0
    proper_citation_rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "properlyCited": self.properly_cited,
            "improperlyCited": self.improperly_cited,
            "uncited": self.uncited,
            "total": self.total,
            "properCitationRate": self.proper_citation_rate,
        }


@dataclass
class SourceTypeTrends:
    """Source type tally over every match card in the course."""

    internet_sources: int = 0
    publication_sources: int = 0
    student_work_sources: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "internetSources": self.internet_sources,
            "publicationSources": self.publication_sources,
            "studentWorkSources": self.student_work_sources,
            "total": self.total,
        }


@dataclass
class SimilarityBucket:
    """One bar of the similarity histogram."""

    range: str
    count: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range, "count": self.count, "percentage": self.percentage}


@dataclass
class CourseAnalytics:
    """Aggregated course-wide analytics snapshot."""

    total_submissions: int = 0
    average_similarity: float = 0.0
    median_similarity: float = 0.0
    max_similarity: float = 0.0
    min_similarity: float = 0.0
    high_risk_count: int = 0
    integrity_issues_count: int = 0
    common_sources: list[CommonSource] = field(default_factory=list)
    citation_patterns: CitationPatterns = field(default_factory=CitationPatterns)
    source_type_trends: SourceTypeTrends = field(default_factory=SourceTypeTrends)
    similarity_distribution: list[SimilarityBucket] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSubmissions": self.total_submissions,
            "averageSimilarity": self.average_similarity,
            "medianSimilarity": self.median_similarity,
            "maxSimilarity": self.max_similarity,
            "minSimilarity": self.min_similarity,
            "highRiskCount": self.high_risk_count,
            "integrityIssuesCount": self.integrity_issues_count,
            "commonSources": [s.to_dict() for s in self.common_sources],
            "citationPatterns": self.citation_patterns.to_dict(),
            "sourceTypeTrends": self.source_type_trends.to_dict(),
            "similarityDistribution": [b.to_dict() for b in self.similarity_distribution],
        }


@dataclass
class StudentPattern:
    """Per-submission risk and citation quality assessment."""

    document_id: str
    student_name: str
    submission_title: str
    similarity: float
    integrity_issues_count: int
    largest_uncited_source: float | None
    citation_quality: CitationQuality
    needs_intervention: bool
    suggested_intervention: InterventionType | None = None
    issues: list[str] = field(default_factory=list)
    date_added: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "documentId": self.document_id,
            "studentName": self.student_name,
            "submissionTitle": self.submission_title,
            "similarity": self.similarity,
            "integrityIssuesCount": self.integrity_issues_count,
            "largestUncitedSource": self.largest_uncited_source,
            "citationQuality": self.citation_quality.value,
            "needsIntervention": self.needs_intervention,
            "suggestedIntervention": (
                self.suggested_intervention.value if self.suggested_intervention else None
            ),
            "issues": list(self.issues),
            "dateAdded": self.date_added,
        }


@dataclass
class InterventionRecommendation:
    """A prioritized follow-up action for one student."""

    student: StudentPattern
    priority: Priority
    action: str
    rationale: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "student": self.student.to_dict(),
            "priority": self.priority.value,
            "action": self.action,
            "rationale": self.rationale,
        }
