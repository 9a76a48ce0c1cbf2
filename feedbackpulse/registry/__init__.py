"""
Response Registry Module.

Single source of truth for submitted responses.
Manages response records, validated updates, audit history, and persistence.
"""

from feedbackpulse.registry.response_registry import ResponseRegistry
from feedbackpulse.registry.validation import (
    FeedbackValidationError,
    ValidationRules,
    VersionConflictError,
)
