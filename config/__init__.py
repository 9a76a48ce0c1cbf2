"""Configuration package for FeedbackPulse."""
