"""
Feedback Classifier.

Turns an analyzer result into a routing verdict: primary and secondary
categories, urgency, whether action is required, and suggested actions.
"""

import logging
from typing import List

from feedbackpulse.analysis import lexicons
from feedbackpulse.models.analysis import FeedbackCategorization, SentimentAnalysis

logger = logging.getLogger(__name__)


class FeedbackClassifier:
    """
    Derives urgency and follow-up actions for analyzed feedback.

    Urgency rules, first match wins:
    1. Urgent vocabulary anywhere in the text -> critical
    2. Strongly negative (confidence > 0.8) -> high
    3. High-priority vocabulary in the text -> medium
    4. Any negative sentiment -> medium
    5. Otherwise -> low
    """

    def __init__(
        self,
        default_category: str = "General Feedback",
        max_actions: int = 5,
        high_urgency_confidence: float = 0.8,
        action_confidence: float = 0.7
    ):
        """
        Initialize feedback classifier.

        Args:
            default_category: Primary category when the analyzer found none
            max_actions: Maximum number of suggested actions
            high_urgency_confidence: Negative confidence above which urgency is high
            action_confidence: Negative confidence above which action is required
        """
        self.default_category = default_category
        self.max_actions = max_actions
        self.high_urgency_confidence = high_urgency_confidence
        self.action_confidence = action_confidence

    def categorize(self, text: str, analysis: SentimentAnalysis) -> FeedbackCategorization:
        """
        Classify feedback using its analysis and the same source text.

        Args:
            text: Source text the analysis was computed from
            analysis: Analyzer output for that text

        Returns:
            FeedbackCategorization
        """
        categories = analysis.categories
        primary_category = categories[0] if categories else self.default_category
        secondary_categories = list(categories[1:3])

        urgency = self._determine_urgency(text, analysis)

        is_negative = analysis.sentiment == "negative"
        action_required = (
            urgency in ("critical", "high")
            or (is_negative and analysis.confidence > self.action_confidence)
        )

        suggested_actions = self._suggest_actions(analysis, primary_category, urgency)

        logger.debug(
            f"Categorized as {primary_category}: urgency={urgency}, "
            f"action_required={action_required}"
        )

        return FeedbackCategorization(
            primary_category=primary_category,
            secondary_categories=secondary_categories,
            urgency=urgency,
            action_required=action_required,
            suggested_actions=suggested_actions
        )

    def _determine_urgency(self, text: str, analysis: SentimentAnalysis) -> str:
        lower_text = text.lower()
        is_negative = analysis.sentiment == "negative"

        if any(term in lower_text for term in lexicons.URGENT_TERMS):
            return "critical"
        if is_negative and analysis.confidence > self.high_urgency_confidence:
            return "high"
        if any(term in lower_text for term in lexicons.HIGH_PRIORITY_TERMS):
            return "medium"
        if is_negative:
            return "medium"
        return "low"

    def _suggest_actions(
        self,
        analysis: SentimentAnalysis,
        primary_category: str,
        urgency: str
    ) -> List[str]:
        """
        Sentiment-driven actions first, then the primary category's actions.
        Duplicates are dropped keeping the first occurrence.
        """
        actions: List[str] = []

        if analysis.sentiment == "negative":
            actions.extend(lexicons.NEGATIVE_ACTIONS)
            if urgency == "critical":
                actions.extend(lexicons.ESCALATION_ACTIONS)
        elif analysis.sentiment == "positive":
            actions.extend(lexicons.POSITIVE_ACTIONS)

        actions.extend(lexicons.CATEGORY_ACTIONS.get(primary_category, ()))

        unique_actions = list(dict.fromkeys(actions))
        return unique_actions[:self.max_actions]


_default_classifier = FeedbackClassifier()


def categorize(text: str, analysis: SentimentAnalysis) -> FeedbackCategorization:
    """Classify with the shared default FeedbackClassifier."""
    return _default_classifier.categorize(text, analysis)
