"""
FeedbackPulse - Lexicon-based feedback analysis.

Analyzes free-text form responses and rolls them up into dashboard insights.
"""

__version__ = "1.0.0"
