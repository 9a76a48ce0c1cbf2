"""
Validation rules for response updates.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from feedbackpulse.analysis.lexicons import CATEGORY_KEYWORDS
from feedbackpulse.models.analysis import SENTIMENTS, URGENCY_LEVELS
from feedbackpulse.models.response import FeedbackUpdate

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE
)

DEFAULT_ALLOWED_CATEGORIES = list(CATEGORY_KEYWORDS) + ["Feature Request", "Bug Report"]


class FeedbackValidationError(ValueError):
    """Raised when an update breaks one or more validation rules."""

    def __init__(self, errors: List[str]):
        super().__init__(f"Validation failed: {'; '.join(errors)}")
        self.errors = errors


class VersionConflictError(ValueError):
    """Raised when a response changed since the caller last read it."""


@dataclass
class ValidationRules:
    comment_min_length: int = 1
    comment_max_length: int = 5000
    comment_required: bool = False
    rating_min: float = 1
    rating_max: float = 10
    rating_required: bool = False
    max_categories: int = 10
    allowed_categories: Optional[List[str]] = field(
        default_factory=lambda: list(DEFAULT_ALLOWED_CATEGORIES)
    )
    notes_max_length: int = 2000


def is_valid_uuid(value: str) -> bool:
    return isinstance(value, str) and bool(_UUID_PATTERN.match(value))


def validate_update(update: FeedbackUpdate, rules: Optional[ValidationRules] = None) -> List[str]:
    """
    Check an update against the rules.

    Args:
        update: Requested update
        rules: Rules to apply (defaults to ValidationRules())

    Returns:
        Human-readable error messages, empty when the update is valid
    """
    rules = rules or ValidationRules()
    errors: List[str] = []

    if not is_valid_uuid(update.response_id):
        errors.append("Invalid feedback ID format")

    if update.comment is not None:
        if rules.comment_required and not update.comment.strip():
            errors.append("Comment is required")
        if update.comment and len(update.comment) < rules.comment_min_length:
            errors.append(f"Comment must be at least {rules.comment_min_length} characters long")
        if len(update.comment) > rules.comment_max_length:
            errors.append(f"Comment must not exceed {rules.comment_max_length} characters")
    elif rules.comment_required:
        errors.append("Comment is required")

    if update.rating is not None:
        if isinstance(update.rating, bool) or not isinstance(update.rating, (int, float)):
            errors.append("Rating must be a number")
        else:
            if update.rating < rules.rating_min:
                errors.append(f"Rating must be at least {rules.rating_min}")
            if update.rating > rules.rating_max:
                errors.append(f"Rating must not exceed {rules.rating_max}")
            if not float(update.rating).is_integer():
                errors.append("Rating must be a whole number")
    elif rules.rating_required:
        errors.append("Rating is required")

    if update.sentiment is not None and update.sentiment not in SENTIMENTS:
        errors.append("Invalid sentiment value")

    if update.urgency is not None and update.urgency not in URGENCY_LEVELS:
        errors.append("Invalid urgency value")

    if update.categories is not None:
        if not isinstance(update.categories, list):
            errors.append("Categories must be an array")
        else:
            if len(update.categories) > rules.max_categories:
                errors.append(f"Cannot have more than {rules.max_categories} categories")

            if rules.allowed_categories is not None:
                invalid = [c for c in update.categories if c not in rules.allowed_categories]
                if invalid:
                    errors.append(f"Invalid categories: {', '.join(invalid)}")

            if len(set(update.categories)) != len(update.categories):
                errors.append("Duplicate categories are not allowed")

    if update.notes is not None and len(update.notes) > rules.notes_max_length:
        errors.append(f"Notes must not exceed {rules.notes_max_length} characters")

    if update.is_visible is not None and not isinstance(update.is_visible, bool):
        errors.append("Visibility must be a boolean value")

    return errors
