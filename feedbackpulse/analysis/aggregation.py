"""
Insight Aggregator and Report Writer.

Rolls analyzed responses up into a dashboard snapshot and exports
per-response insight tables.
"""

import json
import logging
import math
import os
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from feedbackpulse.models.analysis import SENTIMENTS
from feedbackpulse.models.insight import (
    AnalyzedItem,
    CategoryInsight,
    InsightSnapshot,
    TrendAnalysis,
)
from feedbackpulse.models.response import FormResponse

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def dominant_sentiment(sentiments: Iterable[str]) -> str:
    """
    Most common sentiment in the list.
    Ties resolve in the order positive, neutral, negative.
    """
    counts = Counter(s for s in sentiments if s in SENTIMENTS)
    return max(SENTIMENTS, key=lambda s: counts[s])


class InsightAggregator:
    """
    Reduces a chronologically ordered collection of analyzed responses
    into an InsightSnapshot.
    """

    def __init__(
        self,
        top_category_limit: int = 5,
        trend_window: int = 10,
        trend_threshold: float = 0.1
    ):
        """
        Initialize insight aggregator.

        Args:
            top_category_limit: Number of categories to report
            trend_window: Size of the "recent" window (tail of the collection)
            trend_threshold: Minimum change in positive share to report a trend
        """
        self.top_category_limit = top_category_limit
        self.trend_window = trend_window
        self.trend_threshold = trend_threshold

    def aggregate(self, items: Sequence[AnalyzedItem]) -> InsightSnapshot:
        """
        Build a snapshot from analyzed items.

        Args:
            items: Analyzed items, oldest first

        Returns:
            InsightSnapshot (all zeros with a stable trend for empty input)
        """
        if not items:
            logger.info("No responses to aggregate, returning empty snapshot")
            return InsightSnapshot()

        total = len(items)
        sentiment_counts = Counter(item.sentiment for item in items if item.sentiment in SENTIMENTS)
        overall_sentiment = {
            sentiment: round_half_up(sentiment_counts[sentiment] / total * 100)
            for sentiment in SENTIMENTS
        }

        urgent_issues = sum(1 for item in items if item.urgency in ("high", "critical"))
        actionable_items = sum(1 for item in items if item.action_required)

        snapshot = InsightSnapshot(
            overall_sentiment=overall_sentiment,
            top_categories=self._top_categories(items),
            urgent_issues=urgent_issues,
            actionable_items=actionable_items,
            trend_analysis=TrendAnalysis(sentiment_trend=self._sentiment_trend(items)),
            total_responses=total
        )

        logger.info(
            f"Aggregated {total} responses: {overall_sentiment}, "
            f"{urgent_issues} urgent, {actionable_items} actionable, "
            f"trend={snapshot.trend_analysis.sentiment_trend}"
        )
        return snapshot

    def aggregate_responses(self, responses: Sequence[FormResponse]) -> InsightSnapshot:
        """Aggregate stored responses, in the order given."""
        return self.aggregate([AnalyzedItem.from_response(r) for r in responses])

    def _top_categories(self, items: Sequence[AnalyzedItem]) -> List[CategoryInsight]:
        category_sentiments: Dict[str, List[str]] = {}

        for item in items:
            for category in item.categories:
                category_sentiments.setdefault(category, []).append(item.sentiment or "neutral")

        insights = [
            CategoryInsight(
                category=category,
                count=len(sentiments),
                sentiment=dominant_sentiment(sentiments)
            )
            for category, sentiments in category_sentiments.items()
        ]
        insights.sort(key=lambda c: c.count, reverse=True)
        return insights[:self.top_category_limit]

    def _sentiment_trend(self, items: Sequence[AnalyzedItem]) -> str:
        recent = items[-self.trend_window:]
        older = items[:-self.trend_window]

        if not recent or not older:
            return "stable"

        recent_positive = sum(1 for i in recent if i.sentiment == "positive") / len(recent)
        older_positive = sum(1 for i in older if i.sentiment == "positive") / len(older)

        if recent_positive > older_positive + self.trend_threshold:
            return "improving"
        if recent_positive < older_positive - self.trend_threshold:
            return "declining"
        return "stable"


class InsightReportWriter:
    """
    Exports a per-response insight table (CSV) and snapshot metadata (JSON).
    """

    COLUMNS = [
        "Response", "Submitted", "Sentiment", "Urgency",
        "Action Required", "Primary Category", "Confidence", "Rating",
        "Suggested Actions"
    ]

    def write(
        self,
        snapshot: InsightSnapshot,
        responses: Sequence[FormResponse],
        output_dir: str,
        form_id: str
    ) -> str:
        """
        Write insight table and metadata for a form.

        Args:
            snapshot: Snapshot computed from the same responses
            responses: Responses included in the snapshot
            output_dir: Directory to save output
            form_id: Form the responses belong to

        Returns:
            Path to generated CSV file
        """
        rows = []
        for response in responses:
            categories = response.categories
            analysis = response.analysis
            categorization = response.categorization
            rows.append({
                "Response": response.response_id,
                "Submitted": response.submitted_at,
                "Sentiment": response.sentiment or "",
                "Urgency": response.urgency,
                "Action Required": bool(response.metadata.get("actionRequired", False)),
                "Primary Category": categories[0] if categories else "",
                "Confidence": analysis.confidence if analysis else None,
                "Rating": response.overall_rating,
                "Suggested Actions": "; ".join(categorization.suggested_actions) if categorization else ""
            })

        df = pd.DataFrame(rows, columns=self.COLUMNS)

        if df.empty:
            logger.warning(f"No responses for form {form_id}, creating empty insight table")
        else:
            df = df.sort_values("Submitted", ascending=True)

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"insights_{form_id}.csv")
        df.to_csv(output_path, index=False)

        logger.info(f"Insight table saved to {output_path} ({len(df)} responses)")

        rated = df["Rating"].dropna()
        metadata = {
            "form_id": form_id,
            **snapshot.to_dict(),
            "average_rating": round(float(rated.mean()), 1) if not rated.empty else None,
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        }

        metadata_path = os.path.join(output_dir, f"insights_{form_id}_metadata.json")
        with open(metadata_path, 'w') as f:
            json.dump(metadata, f, indent=2)

        logger.info(f"Metadata saved to {metadata_path}")

        return output_path
