"""
Form response data models.

Represents a submitted form response as stored in the response registry,
and the partial update requests applied to it afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import uuid

from feedbackpulse.models.analysis import FeedbackCategorization, SentimentAnalysis


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class FormResponse:
    """
    One submission to a feedback form, with its analysis attached in metadata.
    """
    form_id: str
    answers: Dict[str, Any] = field(default_factory=dict)  # field id -> submitted value
    comment: str = ""  # Text the analysis was computed from
    sentiment: Optional[str] = None  # None when analysis was skipped
    overall_rating: Optional[float] = None
    response_source: str = "web"
    response_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    submitted_at: str = field(default_factory=utc_timestamp)
    version: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.sentiment is not None and self.sentiment not in ("positive", "neutral", "negative"):
            raise ValueError(f"Invalid sentiment: {self.sentiment}")

    @property
    def is_visible(self) -> bool:
        """Deleted or explicitly hidden responses are excluded from dashboards."""
        return self.metadata.get("deleted") is not True and self.metadata.get("isVisible") is not False

    @property
    def urgency(self) -> str:
        return self.metadata.get("urgency") or "low"

    @property
    def categories(self) -> List[str]:
        return list(self.metadata.get("categories") or [])

    @property
    def analysis(self) -> Optional[SentimentAnalysis]:
        """Stored analyzer output, or None when analysis was skipped."""
        data = self.metadata.get("sentimentAnalysis")
        return SentimentAnalysis.from_dict(data) if data else None

    @property
    def categorization(self) -> Optional[FeedbackCategorization]:
        data = self.metadata.get("categorization")
        return FeedbackCategorization.from_dict(data) if data else None

    @classmethod
    def from_dict(cls, data: dict) -> "FormResponse":
        """Create FormResponse from JSON dict."""
        return cls(
            response_id=data["id"],
            form_id=data["form_id"],
            answers=data.get("answers") or {},
            comment=data.get("comment", ""),
            sentiment=data.get("sentiment"),
            overall_rating=data.get("overall_rating"),
            response_source=data.get("response_source", "web"),
            submitted_at=data.get("submitted_at", ""),
            version=data.get("version", 1),
            metadata=data.get("metadata") or {}
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.response_id,
            "form_id": self.form_id,
            "answers": self.answers,
            "comment": self.comment,
            "sentiment": self.sentiment,
            "overall_rating": self.overall_rating,
            "response_source": self.response_source,
            "submitted_at": self.submitted_at,
            "version": self.version,
            "metadata": self.metadata
        }


@dataclass
class FeedbackUpdate:
    """
    Partial update to a stored response.
    Fields left as None are not touched.
    """
    response_id: str
    comment: Optional[str] = None
    sentiment: Optional[str] = None
    urgency: Optional[str] = None
    categories: Optional[List[str]] = None
    rating: Optional[float] = None
    notes: Optional[str] = None
    is_visible: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class UpdateResult:
    """Outcome of applying a FeedbackUpdate."""
    success: bool
    timestamp: str
    data: Optional[dict] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)
    version: Optional[int] = None
