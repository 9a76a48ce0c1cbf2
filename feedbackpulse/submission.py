"""
Submission Processor.

Turns the raw answers of one form submission into an analyzed,
registered response record.
"""

import logging
from numbers import Real
from typing import Any, Dict, Optional, Tuple

from feedbackpulse.analysis.analyzer import SentimentAnalyzer
from feedbackpulse.analysis.classifier import FeedbackClassifier
from feedbackpulse.models.analysis import FeedbackCategorization, SentimentAnalysis
from feedbackpulse.models.response import FormResponse
from feedbackpulse.registry.response_registry import ResponseRegistry

logger = logging.getLogger(__name__)


class SubmissionProcessor:
    """
    Analyzes submitted answers and stores the resulting response.

    Flow:
    1. Collect text answers longer than min_answer_length
    2. Analyze + classify the joined text (skipped when too short)
    3. Average numeric rating answers
    4. Register the response and persist the registry
    """

    def __init__(
        self,
        registry: ResponseRegistry,
        analyzer: Optional[SentimentAnalyzer] = None,
        classifier: Optional[FeedbackClassifier] = None,
        min_answer_length: int = 10,
        rating_range: Tuple[float, float] = (1, 10)
    ):
        """
        Initialize submission processor.

        Args:
            registry: Registry new responses are added to
            analyzer: Sentiment analyzer (default instance when None)
            classifier: Feedback classifier (default instance when None)
            min_answer_length: Text answers must be longer than this to be analyzed
            rating_range: Inclusive (min, max) of numeric answers treated as ratings
        """
        self.registry = registry
        self.analyzer = analyzer or SentimentAnalyzer()
        self.classifier = classifier or FeedbackClassifier()
        self.min_answer_length = min_answer_length
        self.rating_range = rating_range

    def build_analysis_text(self, answers: Dict[str, Any]) -> str:
        """Join every sufficiently long text answer with a single space."""
        return " ".join(
            value for value in answers.values()
            if isinstance(value, str) and len(value) > self.min_answer_length
        )

    def extract_overall_rating(self, answers: Dict[str, Any]) -> Optional[float]:
        """
        Mean of the numeric answers inside the rating range.

        Returns:
            Average rating, or None when the submission has no rating answers
        """
        low, high = self.rating_range
        ratings = [
            float(value) for value in answers.values()
            if isinstance(value, Real) and not isinstance(value, bool) and low <= value <= high
        ]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)

    def analyze_answers(
        self,
        answers: Dict[str, Any]
    ) -> Tuple[str, Optional[SentimentAnalysis], Optional[FeedbackCategorization]]:
        """
        Analyze the text portion of a submission.

        Returns:
            (analysis text, analysis, categorization); both results are None
            when there is not enough text to analyze
        """
        text = self.build_analysis_text(answers)

        if len(text) <= self.min_answer_length:
            logger.debug("Not enough free text in submission, skipping analysis")
            return text, None, None

        analysis = self.analyzer.analyze(text)
        categorization = self.classifier.categorize(text, analysis)
        return text, analysis, categorization

    def submit(self, form_id: str, answers: Dict[str, Any], source: str = "web") -> FormResponse:
        """
        Analyze, register and persist one submission.

        Args:
            form_id: Form the answers belong to
            answers: Field id -> submitted value
            source: Channel the response came from (e.g., "web", "qr", "email")

        Returns:
            The stored FormResponse
        """
        text, analysis, categorization = self.analyze_answers(answers)

        metadata = {
            "sentimentAnalysis": analysis.to_dict() if analysis else None,
            "categorization": categorization.to_dict() if categorization else None,
            "categories": categorization.categories if categorization else [],
            "urgency": categorization.urgency if categorization else "low",
            "actionRequired": categorization.action_required if categorization else False,
            "suggestedActions": categorization.suggested_actions if categorization else [],
            "keywords": analysis.keywords if analysis else [],
            "emotions": analysis.emotions.to_dict() if analysis else {}
        }

        response = FormResponse(
            form_id=form_id,
            answers=dict(answers),
            comment=text,
            sentiment=analysis.sentiment if analysis else None,
            overall_rating=self.extract_overall_rating(answers),
            response_source=source,
            metadata=metadata
        )

        self.registry.add_response(response)
        self.registry.save()

        if categorization and categorization.action_required:
            logger.warning(
                f"Response {response.response_id} requires action "
                f"(urgency={categorization.urgency}, category={categorization.primary_category})"
            )

        return response
