"""
Analysis components for FeedbackPulse.

Contains the stages every response text passes through:
- Sentiment Analyzer (sentiment, categories, keywords, emotions)
- Feedback Classifier (urgency, routing, suggested actions)
- Insight Aggregator (dashboard roll-up over many responses)
"""
