"""
Insight data models.

Represents the per-response input of the insight aggregator and the
dashboard snapshot it produces.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from feedbackpulse.models.response import FormResponse

SENTIMENT_TRENDS = ("improving", "declining", "stable")


@dataclass
class AnalyzedItem:
    """
    Minimal view of an analyzed response.
    Only the fields the aggregator reads.
    """
    sentiment: Optional[str] = None
    urgency: Optional[str] = None
    action_required: bool = False
    categories: List[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, response: FormResponse) -> "AnalyzedItem":
        return cls.from_dict(response.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "AnalyzedItem":
        """
        Build from a stored response record.

        Urgency, action flag and categories are read from the record's
        metadata, falling back to top-level keys for flat records.
        """
        metadata = data.get("metadata") or {}
        return cls(
            sentiment=data.get("sentiment"),
            urgency=metadata.get("urgency", data.get("urgency")),
            action_required=bool(metadata.get("actionRequired", data.get("actionRequired", False))),
            categories=list(metadata.get("categories", data.get("categories")) or [])
        )


@dataclass
class CategoryInsight:
    category: str
    count: int
    sentiment: str  # Dominant sentiment among responses carrying the category

    def to_dict(self) -> dict:
        return {"category": self.category, "count": self.count, "sentiment": self.sentiment}


@dataclass
class TrendAnalysis:
    sentiment_trend: str = "stable"
    category_trends: List[dict] = field(default_factory=list)

    def __post_init__(self):
        if self.sentiment_trend not in SENTIMENT_TRENDS:
            raise ValueError(f"Invalid sentiment trend: {self.sentiment_trend}")

    def to_dict(self) -> dict:
        return {
            "sentimentTrend": self.sentiment_trend,
            "categoryTrends": list(self.category_trends)
        }


@dataclass
class InsightSnapshot:
    """
    Dashboard roll-up of a collection of analyzed responses.
    Output of the Insight Aggregator.
    """
    overall_sentiment: dict = field(
        default_factory=lambda: {"positive": 0, "neutral": 0, "negative": 0}
    )
    top_categories: List[CategoryInsight] = field(default_factory=list)
    urgent_issues: int = 0
    actionable_items: int = 0
    trend_analysis: TrendAnalysis = field(default_factory=TrendAnalysis)
    total_responses: int = 0

    def to_dict(self) -> dict:
        return {
            "overallSentiment": dict(self.overall_sentiment),
            "topCategories": [c.to_dict() for c in self.top_categories],
            "urgentIssues": self.urgent_issues,
            "actionableItems": self.actionable_items,
            "trendAnalysis": self.trend_analysis.to_dict(),
            "totalResponses": self.total_responses
        }
