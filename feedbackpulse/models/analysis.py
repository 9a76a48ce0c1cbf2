"""
Analysis result models.

Represents the per-text output of the analyzer and the classifier.
Serialized with the camelCase keys used by the stored response record.
"""

from dataclasses import dataclass, field
from typing import List

SENTIMENTS = ("positive", "neutral", "negative")
URGENCY_LEVELS = ("low", "medium", "high", "critical")  # Ordered by severity
EMOTIONS = ("joy", "anger", "fear", "sadness", "surprise", "disgust")


@dataclass
class EmotionScores:
    """Six emotion dimensions, each in [0, 1]."""
    joy: float = 0.0
    anger: float = 0.0
    fear: float = 0.0
    sadness: float = 0.0
    surprise: float = 0.0
    disgust: float = 0.0

    def __post_init__(self):
        for name in EMOTIONS:
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"Invalid {name} score: {value}. Must be 0-1")

    @classmethod
    def from_dict(cls, data: dict) -> "EmotionScores":
        return cls(**{name: float(data.get(name, 0.0)) for name in EMOTIONS})

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in EMOTIONS}


@dataclass
class SentimentAnalysis:
    """
    Lexical analysis of a block of feedback text.
    Output of the Sentiment Analyzer.
    """
    sentiment: str  # "positive", "neutral", or "negative"
    confidence: float  # 0.5-0.95
    categories: List[str] = field(default_factory=list)  # At most 3, most matched first
    keywords: List[str] = field(default_factory=list)  # At most 5, most frequent first
    emotions: EmotionScores = field(default_factory=EmotionScores)

    def __post_init__(self):
        if self.sentiment not in SENTIMENTS:
            raise ValueError(
                f"Invalid sentiment: {self.sentiment}. Must be 'positive', 'neutral', or 'negative'"
            )

        if not (0.5 <= self.confidence <= 0.95):
            raise ValueError(f"Invalid confidence: {self.confidence}. Must be 0.5-0.95")

    @classmethod
    def from_dict(cls, data: dict) -> "SentimentAnalysis":
        """Create SentimentAnalysis from a stored record dict."""
        return cls(
            sentiment=data["sentiment"],
            confidence=data["confidence"],
            categories=list(data.get("categories", [])),
            keywords=list(data.get("keywords", [])),
            emotions=EmotionScores.from_dict(data.get("emotions", {}))
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "sentiment": self.sentiment,
            "confidence": self.confidence,
            "categories": list(self.categories),
            "keywords": list(self.keywords),
            "emotions": self.emotions.to_dict()
        }


@dataclass
class FeedbackCategorization:
    """
    Routing verdict for a piece of feedback.
    Output of the Feedback Classifier.
    """
    primary_category: str
    secondary_categories: List[str] = field(default_factory=list)
    urgency: str = "low"  # "low", "medium", "high", or "critical"
    action_required: bool = False
    suggested_actions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.urgency not in URGENCY_LEVELS:
            raise ValueError(
                f"Invalid urgency: {self.urgency}. Must be one of {', '.join(URGENCY_LEVELS)}"
            )

    @property
    def categories(self) -> List[str]:
        """Primary category followed by the secondary ones."""
        return [self.primary_category] + list(self.secondary_categories)

    @classmethod
    def from_dict(cls, data: dict) -> "FeedbackCategorization":
        return cls(
            primary_category=data["primaryCategory"],
            secondary_categories=list(data.get("secondaryCategories", [])),
            urgency=data.get("urgency", "low"),
            action_required=bool(data.get("actionRequired", False)),
            suggested_actions=list(data.get("suggestedActions", []))
        )

    def to_dict(self) -> dict:
        return {
            "primaryCategory": self.primary_category,
            "secondaryCategories": list(self.secondary_categories),
            "urgency": self.urgency,
            "actionRequired": self.action_required,
            "suggestedActions": list(self.suggested_actions)
        }
