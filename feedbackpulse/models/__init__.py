"""
Data models for FeedbackPulse.

- Analysis results (SentimentAnalysis, FeedbackCategorization)
- Stored responses and update requests
- Dashboard insight snapshots
"""
