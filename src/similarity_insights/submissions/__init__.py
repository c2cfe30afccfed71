"""
Submission records.

Strict data models for submissions and their match cards, plus loading
from a course data directory.
"""

from .loader import SubmissionLoader, SubmissionLoadError, extract_documents
from .models import (
    CitationStatus,
    MatchCardRecord,
    RecordValidationError,
    SourceType,
    SubmissionRecord,
    parse_submissions,
    parse_timestamp,
    to_scalar_percent,
)

__all__ = [
    "CitationStatus",
    "MatchCardRecord",
    "RecordValidationError",
    "SourceType",
    "SubmissionLoadError",
    "SubmissionLoader",
    "SubmissionRecord",
    "extract_documents",
    "parse_submissions",
    "parse_timestamp",
    "to_scalar_percent",
]
