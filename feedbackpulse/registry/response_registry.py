"""
Response Registry - Local store of analyzed form responses.

Manages response records, validated updates with an audit trail,
deletion, and persistence.
"""

import json
import os
import shutil
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from feedbackpulse.analysis.analyzer import SentimentAnalyzer
from feedbackpulse.models.response import FeedbackUpdate, FormResponse, UpdateResult, utc_timestamp
from feedbackpulse.registry.validation import (
    FeedbackValidationError,
    ValidationRules,
    VersionConflictError,
    is_valid_uuid,
    validate_update,
)

logger = logging.getLogger(__name__)


class ResponseRegistry:
    """
    Single source of truth for submitted responses.

    Every update is validated, checked against the caller's expected
    version, and recorded in the response's modification history.
    """

    def __init__(
        self,
        registry_path: str,
        analyzer: Optional[SentimentAnalyzer] = None,
        rules: Optional[ValidationRules] = None,
        history_limit: int = 10
    ):
        """
        Initialize registry from disk or create new empty registry.

        Args:
            registry_path: Path to the responses JSON file
            analyzer: Analyzer used to re-analyze edited comments
            rules: Validation rules for updates
            history_limit: Number of modification history entries kept per response
        """
        self.registry_path = registry_path
        self.analyzer = analyzer or SentimentAnalyzer()
        self.rules = rules or ValidationRules()
        self.history_limit = history_limit
        self.responses: Dict[str, FormResponse] = {}  # response_id -> FormResponse
        self.version = "1.0.0"
        self.last_updated = utc_timestamp()

        if os.path.exists(registry_path):
            self._load()
        else:
            logger.info(f"No existing registry found at {registry_path}, initializing empty registry")

    def _load(self) -> None:
        """Load registry from disk."""
        try:
            with open(self.registry_path, 'r') as f:
                data = json.load(f)

            self.responses = self._parse_responses(data)
            if isinstance(data, dict):
                self.version = data.get("version", "1.0.0")
                self.last_updated = data.get("last_updated", utc_timestamp())

            logger.info(f"Loaded {len(self.responses)} responses from registry")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse registry JSON: {e}")
            self._try_restore_from_backup()
        except (OSError, KeyError, ValueError, TypeError) as e:
            logger.error(f"Failed to load registry: {e}")
            self._try_restore_from_backup()

    @staticmethod
    def _parse_responses(data: Any) -> Dict[str, FormResponse]:
        """
        Build responses from a registry payload.

        Accepts a plain list of records or a {"responses": [...]} document.

        Raises:
            ValueError: If the payload or one of its records has the wrong shape
        """
        records = data.get("responses", []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise ValueError(f"Expected a list of responses, got {type(records).__name__}")

        responses: Dict[str, FormResponse] = {}
        for record in records:
            if not isinstance(record, dict):
                raise ValueError(f"Invalid response record: {record!r}")
            response = FormResponse.from_dict(record)
            responses[response.response_id] = response
        return responses

    def _try_restore_from_backup(self) -> None:
        """Attempt to restore from backup file if main registry is corrupted."""
        backup_path = f"{self.registry_path}.backup"
        if not os.path.exists(backup_path):
            logger.warning("No backup file found. Starting with empty registry.")
            self.responses = {}
            return

        logger.warning(f"Attempting to restore from backup: {backup_path}")
        try:
            with open(backup_path, 'r') as f:
                data = json.load(f)
            self.responses = self._parse_responses(data)
            shutil.copy(backup_path, self.registry_path)
            logger.info("Successfully restored from backup")
        except (OSError, KeyError, ValueError, TypeError) as e:
            logger.error(f"Backup restoration failed: {e}. Starting with empty registry.")
            self.responses = {}

    def add_response(self, response: FormResponse) -> str:
        """
        Register a new response.

        Returns:
            response_id of the registered response

        Raises:
            ValueError: If a response with the same ID already exists
        """
        if response.response_id in self.responses:
            raise ValueError(f"Response already exists with ID: {response.response_id}")

        self.responses[response.response_id] = response
        logger.info(
            f"Registered response {response.response_id} for form {response.form_id} "
            f"(sentiment={response.sentiment})"
        )
        return response.response_id

    def get_response(self, response_id: str) -> Optional[FormResponse]:
        """Retrieve response by ID. Returns None if not found."""
        return self.responses.get(response_id)

    def list_responses(self, form_id: Optional[str] = None, include_hidden: bool = False) -> List[FormResponse]:
        """
        Return responses oldest first.

        Args:
            form_id: Restrict to one form (all forms when None)
            include_hidden: Include deleted and hidden responses
        """
        selected = [
            r for r in self.responses.values()
            if (form_id is None or r.form_id == form_id)
            and (include_hidden or r.is_visible)
        ]
        selected.sort(key=lambda r: r.submitted_at)
        return selected

    def update_response(
        self,
        update: FeedbackUpdate,
        expected_version: Optional[int] = None,
        modified_by: str = "system"
    ) -> FormResponse:
        """
        Apply a validated update to a stored response.

        Args:
            update: Requested changes
            expected_version: Version the caller last read; None skips the check
            modified_by: Identifier recorded in the modification history

        Returns:
            The updated response

        Raises:
            FeedbackValidationError: If the update breaks validation rules
            ValueError: If the response does not exist
            VersionConflictError: If the stored version differs from expected_version
        """
        errors = validate_update(update, self.rules)
        if errors:
            raise FeedbackValidationError(errors)

        response = self.responses.get(update.response_id)
        if response is None:
            raise ValueError(f"Response not found: {update.response_id}")

        if expected_version is not None and response.version != expected_version:
            raise VersionConflictError(
                "Feedback has been modified by another user. Please refresh and try again."
            )

        timestamp = utc_timestamp()
        changes = self._changed_fields(update, response)

        metadata = dict(response.metadata)
        metadata.update(update.metadata or {})
        metadata["lastModified"] = timestamp
        metadata["modifiedBy"] = modified_by
        history = list(response.metadata.get("modificationHistory", []))
        history.append({"timestamp": timestamp, "userId": modified_by, "changes": changes})
        metadata["modificationHistory"] = history[-self.history_limit:]

        sentiment = update.sentiment
        if update.comment and update.comment != response.comment:
            analysis = self.analyzer.analyze(update.comment)
            metadata["sentimentAnalysis"] = analysis.to_dict()
            if sentiment is None:
                sentiment = analysis.sentiment
            response.comment = update.comment
            logger.debug(f"Re-analyzed comment for {response.response_id}: {analysis.sentiment}")

        if update.categories is not None:
            metadata["categories"] = list(update.categories)
        if update.urgency is not None:
            metadata["urgency"] = update.urgency
        if update.notes is not None:
            metadata["notes"] = update.notes
        if update.is_visible is not None:
            metadata["isVisible"] = update.is_visible

        if sentiment is not None:
            response.sentiment = sentiment
        if update.rating:
            response.overall_rating = update.rating

        response.metadata = metadata
        response.version += 1

        logger.info(
            f"Updated response {response.response_id} to version {response.version} "
            f"({', '.join(changes) or 'metadata only'})"
        )
        return response

    def apply_update(
        self,
        update: FeedbackUpdate,
        expected_version: Optional[int] = None,
        modified_by: str = "system"
    ) -> UpdateResult:
        """
        Apply an update and report the outcome instead of raising.
        """
        timestamp = utc_timestamp()
        try:
            response = self.update_response(update, expected_version, modified_by)
        except FeedbackValidationError as e:
            logger.warning(f"Rejected update for {update.response_id}: {e}")
            return UpdateResult(
                success=False,
                timestamp=timestamp,
                error="Validation failed",
                validation_errors=e.errors
            )
        except ValueError as e:
            logger.warning(f"Update failed for {update.response_id}: {e}")
            return UpdateResult(success=False, timestamp=timestamp, error=str(e))

        return UpdateResult(
            success=True,
            timestamp=timestamp,
            data=response.to_dict(),
            version=response.version
        )

    def batch_update(
        self,
        updates: Sequence[FeedbackUpdate],
        modified_by: str = "system"
    ) -> Tuple[bool, List[UpdateResult], Dict[str, int]]:
        """
        Apply several updates independently.

        Returns:
            (all succeeded, per-update results, {"successful": n, "failed": m})
        """
        results = [self.apply_update(u, modified_by=modified_by) for u in updates]
        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful

        logger.info(f"Batch update complete: {successful} successful, {failed} failed")
        return failed == 0, results, {"successful": successful, "failed": failed}

    def delete_response(self, response_id: str) -> None:
        """
        Remove a response.

        Raises:
            ValueError: If the ID is malformed or no such response exists
        """
        if not is_valid_uuid(response_id):
            raise ValueError("Invalid feedback ID format")

        if response_id not in self.responses:
            raise ValueError("Feedback not found or already deleted")

        del self.responses[response_id]
        logger.info(f"Deleted response {response_id}")

    def save(self) -> None:
        """
        Persist registry to disk with atomic write pattern.
        Creates backup before write.
        """
        self.last_updated = utc_timestamp()

        directory = os.path.dirname(self.registry_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        if os.path.exists(self.registry_path):
            backup_path = f"{self.registry_path}.backup"
            shutil.copy(self.registry_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        data = {
            "version": self.version,
            "last_updated": self.last_updated,
            "responses": [r.to_dict() for r in self.responses.values()]
        }

        temp_path = f"{self.registry_path}.tmp"
        try:
            with open(temp_path, 'w') as f:
                json.dump(data, f, indent=2)

            os.replace(temp_path, self.registry_path)
            logger.info(f"Registry saved: {len(self.responses)} responses")

        except (OSError, TypeError) as e:
            logger.error(f"Failed to save registry: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    @staticmethod
    def _changed_fields(update: FeedbackUpdate, current: FormResponse) -> Dict[str, Dict[str, Any]]:
        """Audit trail entry: field -> {from, to} for fields the update changes."""
        changes: Dict[str, Dict[str, Any]] = {}
        metadata = current.metadata

        def record(name: str, old: Any, new: Any) -> None:
            if new is not None and new != old:
                changes[name] = {"from": old, "to": new}

        record("comment", current.comment, update.comment or None)
        record("sentiment", current.sentiment, update.sentiment)
        record("rating", current.overall_rating, update.rating)
        record("urgency", metadata.get("urgency"), update.urgency)
        record("categories", metadata.get("categories", []), update.categories)
        record("notes", metadata.get("notes"), update.notes)
        record("isVisible", metadata.get("isVisible"), update.is_visible)

        return changes
