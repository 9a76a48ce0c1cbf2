"""
Pipeline Orchestrator.

Wires the analysis components, the response registry and storage
together from the central configuration.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from feedbackpulse.analysis.aggregation import InsightAggregator, InsightReportWriter
from feedbackpulse.analysis.analyzer import SentimentAnalyzer
from feedbackpulse.analysis.classifier import FeedbackClassifier
from feedbackpulse.models.insight import InsightSnapshot
from feedbackpulse.models.response import FeedbackUpdate, FormResponse, UpdateResult
from feedbackpulse.registry.response_registry import ResponseRegistry
from feedbackpulse.submission import SubmissionProcessor
from feedbackpulse.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


class FeedbackPipeline:
    """
    Entry point for every workflow the CLI exposes.

    Coordinates:
    1. Submission → Analysis → Classification → Registry
    2. Registry → Insight Aggregation → Snapshot storage → Report export
    3. Registry updates and deletions
    """

    def __init__(self, registry_path: str, data_root: str, output_dir: Optional[str] = None):
        """
        Initialize pipeline.

        Args:
            registry_path: Path to the responses JSON file
            data_root: Root directory for data storage
            output_dir: Directory for exported reports
        """
        self.output_dir = output_dir or str(settings.OUTPUT_ROOT)

        logger.info("Initializing pipeline components...")

        self.analyzer = SentimentAnalyzer()
        self.classifier = FeedbackClassifier(
            default_category=settings.DEFAULT_CATEGORY,
            max_actions=settings.MAX_SUGGESTED_ACTIONS
        )
        self.registry = ResponseRegistry(
            registry_path,
            analyzer=self.analyzer,
            history_limit=settings.MODIFICATION_HISTORY_LIMIT
        )
        self.storage = StorageManager(data_root)
        self.submission_processor = SubmissionProcessor(
            registry=self.registry,
            analyzer=self.analyzer,
            classifier=self.classifier,
            min_answer_length=settings.MIN_ANSWER_LENGTH,
            rating_range=(settings.RATING_MIN, settings.RATING_MAX)
        )
        self.aggregator = InsightAggregator(
            top_category_limit=settings.TOP_CATEGORY_LIMIT,
            trend_window=settings.TREND_WINDOW_SIZE,
            trend_threshold=settings.TREND_THRESHOLD
        )
        self.report_writer = InsightReportWriter()

        logger.info("Pipeline initialized successfully")

    def analyze_text(self, text: str) -> Dict[str, Any]:
        """Analyze and classify a single text without storing anything."""
        analysis = self.analyzer.analyze(text)
        categorization = self.classifier.categorize(text, analysis)
        return {
            "sentimentAnalysis": analysis.to_dict(),
            "categorization": categorization.to_dict()
        }

    def submit(self, form_id: str, answers: Dict[str, Any], source: str = "web") -> FormResponse:
        return self.submission_processor.submit(form_id, answers, source)

    def generate_insights(
        self,
        form_id: str,
        date: Optional[str] = None,
        export: bool = False
    ) -> Tuple[InsightSnapshot, Optional[str]]:
        """
        Aggregate the visible responses of a form.

        Args:
            form_id: Form to summarize
            date: Snapshot date (YYYY-MM-DD), defaults to today
            export: Also write the CSV insight table

        Returns:
            (snapshot, CSV path or None)
        """
        date = date or datetime.now().strftime("%Y-%m-%d")
        responses = self.registry.list_responses(form_id=form_id)

        logger.info(f"Generating insights for form {form_id} from {len(responses)} responses")

        snapshot = self.aggregator.aggregate_responses(responses)
        self.storage.save_snapshot(snapshot.to_dict(), form_id, date)

        output_path = None
        if export:
            output_path = self.report_writer.write(snapshot, responses, self.output_dir, form_id)

        return snapshot, output_path

    def update(
        self,
        update: FeedbackUpdate,
        expected_version: Optional[int] = None,
        modified_by: str = "cli"
    ) -> UpdateResult:
        result = self.registry.apply_update(update, expected_version, modified_by)
        if result.success:
            self.registry.save()
        return result

    def delete(self, response_id: str) -> None:
        self.registry.delete_response(response_id)
        self.registry.save()
