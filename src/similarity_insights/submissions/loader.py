"""
Submission loading from a course data directory.

Reads the folder listing (``folder_structure.json``) and the per-document
report files (``documents/<id>.json``) and turns them into validated
SubmissionRecord objects ready for the analytics engine.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..utils.logging import get_logger
from .models import SubmissionRecord

logger = get_logger(__name__)

FOLDER_STRUCTURE_FILE = "folder_structure.json"
DOCUMENTS_DIR = "documents"


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class SubmissionLoadError(Exception):
    """The course folder listing is missing or cannot be parsed."""

    pass


# -----------------------------------------------------------------------------
# Folder listing
# -----------------------------------------------------------------------------


def extract_documents(items: list[Any]) -> list[dict[str, Any]]:
    """
    Flatten a folder tree into its document entries.

    Folders are walked depth first so documents keep their listing order.

    Args:
        items: Folder listing items (folders and documents)

    Returns:
        List of document entry mappings
    """
    documents: list[dict[str, Any]] = []

    for item in items:
        if not isinstance(item, Mapping):
            continue
        if item.get("type") == "document":
            documents.append(dict(item))
        elif item.get("type") == "folder" and item.get("children"):
            documents.extend(extract_documents(item["children"]))

    return documents


class SubmissionLoader:
    """Loads course submissions from a data directory."""

    def __init__(self, data_dir: Path):
        """
        Initialize the loader.

        Args:
            data_dir: Directory holding folder_structure.json and documents/
        """
        self.data_dir = Path(data_dir)

    @property
    def listing_path(self) -> Path:
        return self.data_dir / FOLDER_STRUCTURE_FILE

    def document_path(self, document_id: str) -> Path:
        return self.data_dir / DOCUMENTS_DIR / f"{document_id}.json"

    def load_all(self) -> list[SubmissionRecord]:
        """
        Load every submission in the folder listing.

        Returns:
            Submissions in listing order

        Raises:
            SubmissionLoadError: If the folder listing is missing or invalid
            RecordValidationError: If an entry violates the record contract
        """
        entries = extract_documents(self._read_listing())
        submissions = [self._load_entry(entry) for entry in entries]
        logger.info(f"Loaded {len(submissions)} submissions from {self.data_dir}")
        return submissions

    def load_by_id(self, document_id: str) -> SubmissionRecord | None:
        """
        Load a single submission by its document ID.

        Args:
            document_id: ID from the folder listing

        Returns:
            SubmissionRecord, or None if the ID is not listed
        """
        for entry in extract_documents(self._read_listing()):
            if str(entry.get("id")) == document_id:
                return self._load_entry(entry)
        logger.debug(f"Submission {document_id} not found in listing")
        return None

    def _read_listing(self) -> list[Any]:
        path = self.listing_path
        if not path.exists():
            raise SubmissionLoadError(f"Folder listing not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SubmissionLoadError(f"Invalid JSON in {path}: {e}") from e

        if isinstance(data, Mapping):
            data = [data]
        if not isinstance(data, list):
            raise SubmissionLoadError(f"Folder listing must be a list of items: {path}")
        return data

    def _load_entry(self, entry: dict[str, Any]) -> SubmissionRecord:
        """Merge a listing entry with its document report, if available."""
        merged = dict(entry)
        document = self._read_document(entry.get("id"))

        if document is not None:
            merged["title"] = document.get("title") or entry.get("title")
            merged["author"] = document.get("author") or entry.get("author")
            merged["matchCards"] = document.get("matchCards") or []

        return SubmissionRecord.from_dict(merged)

    def _read_document(self, document_id: Any) -> dict[str, Any] | None:
        if document_id is None:
            return None

        path = self.document_path(str(document_id))
        if not path.exists():
            logger.warning(f"Document report not found for {document_id}: {path}")
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read document report {path}: {e}")
            return None

        if not isinstance(data, Mapping):
            logger.warning(f"Document report is not an object: {path}")
            return None
        return dict(data)
