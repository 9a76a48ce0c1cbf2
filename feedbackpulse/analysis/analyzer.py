"""
Sentiment Analyzer.

Scores free-text feedback against fixed lexicons to produce sentiment,
confidence, categories, keywords and emotion scores.
"""

import logging
import re
from collections import Counter
from typing import Dict, List, Tuple

from feedbackpulse.analysis import lexicons
from feedbackpulse.models.analysis import EmotionScores, SentimentAnalysis

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


def tokenize(text: str, min_length: int = 3) -> List[str]:
    """
    Lower-case, strip punctuation and split text into tokens.

    Args:
        text: Raw feedback text
        min_length: Shortest token length to keep

    Returns:
        Tokens in encounter order
    """
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [word for word in cleaned.split() if len(word) >= min_length]


class SentimentAnalyzer:
    """
    Rule-based analyzer for feedback text.

    Deterministic and stateless: every call reads only the lexicon tables,
    so one instance can be shared freely.
    """

    def __init__(
        self,
        max_categories: int = 3,
        max_keywords: int = 5,
        emotion_weight: float = 0.3
    ):
        """
        Initialize sentiment analyzer.

        Args:
            max_categories: Number of categories to report
            max_keywords: Number of keywords to report
            emotion_weight: Score added per matched emotion keyword
        """
        self.max_categories = max_categories
        self.max_keywords = max_keywords
        self.emotion_weight = emotion_weight
        self._category_patterns = {
            category: [re.compile(rf"\b{re.escape(keyword)}\b", re.ASCII) for keyword in keywords]
            for category, keywords in lexicons.CATEGORY_KEYWORDS.items()
        }

    def analyze(self, text: str) -> SentimentAnalysis:
        """
        Analyze a block of feedback text.

        Args:
            text: Raw feedback text (may be empty)

        Returns:
            SentimentAnalysis; neutral with confidence 0.5 when no lexicon word matches
        """
        sentiment, confidence = self._score_sentiment(tokenize(text))

        analysis = SentimentAnalysis(
            sentiment=sentiment,
            confidence=confidence,
            categories=self.extract_categories(text),
            keywords=self.extract_keywords(text),
            emotions=self.score_emotions(text)
        )

        logger.debug(
            f"Analyzed {len(text)} chars: {sentiment} ({confidence:.2f}), "
            f"categories={analysis.categories}"
        )
        return analysis

    def _score_sentiment(self, words: List[str]) -> Tuple[str, float]:
        positive = negative = neutral = 0

        for word in words:
            if word in lexicons.POSITIVE_WORDS:
                positive += 1
            elif word in lexicons.NEGATIVE_WORDS:
                negative += 1
            elif word in lexicons.NEUTRAL_WORDS:
                neutral += 1

        total = positive + negative + neutral

        if total == 0:
            return "neutral", 0.5
        if positive > negative:
            return "positive", min(0.95, 0.5 + (positive / total) * 0.5)
        if negative > positive:
            return "negative", min(0.95, 0.5 + (negative / total) * 0.5)
        return "neutral", 0.6

    def extract_categories(self, text: str) -> List[str]:
        """
        Rank categories by whole-word keyword hits in the raw text.

        Ties keep the declaration order of CATEGORY_KEYWORDS.
        """
        lower_text = text.lower()
        found = []

        for category, patterns in self._category_patterns.items():
            score = sum(len(pattern.findall(lower_text)) for pattern in patterns)
            if score > 0:
                found.append((category, score))

        found.sort(key=lambda item: item[1], reverse=True)
        return [category for category, _ in found[:self.max_categories]]

    def extract_keywords(self, text: str) -> List[str]:
        """Most frequent non-stop-word tokens longer than 3 characters."""
        words = [w for w in tokenize(text, min_length=4) if w not in lexicons.STOP_WORDS]
        # Counter keeps first-seen order, so the stable sort breaks ties by encounter
        ranked = sorted(Counter(words).items(), key=lambda item: item[1], reverse=True)
        return [word for word, _ in ranked[:self.max_keywords]]

    def score_emotions(self, text: str) -> EmotionScores:
        lower_text = text.lower()
        scores: Dict[str, float] = {}

        for emotion, keywords in lexicons.EMOTION_KEYWORDS.items():
            matched = sum(1 for keyword in keywords if keyword in lower_text)
            scores[emotion] = min(1.0, matched * self.emotion_weight)

        return EmotionScores(**scores)


_default_analyzer = SentimentAnalyzer()


def analyze(text: str) -> SentimentAnalysis:
    """Analyze text with the shared default SentimentAnalyzer."""
    return _default_analyzer.analyze(text)
