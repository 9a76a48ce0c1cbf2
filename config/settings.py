"""
Configuration settings for FeedbackPulse.

Centralized configuration for the analysis core, the response registry
and the command-line pipeline.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("FEEDBACKPULSE_DATA_ROOT", str(PROJECT_ROOT / "data")))
OUTPUT_ROOT = Path(os.getenv("FEEDBACKPULSE_OUTPUT_ROOT", str(PROJECT_ROOT / "output")))
REGISTRY_PATH = DATA_ROOT / "responses.json"

# Submission workflow
MIN_ANSWER_LENGTH = 10  # Text answers must be longer than this to be analyzed
RATING_MIN = 1
RATING_MAX = 10
DEFAULT_RESPONSE_SOURCE = "web"

# Classifier
MAX_SUGGESTED_ACTIONS = 5
DEFAULT_CATEGORY = "General Feedback"

# Insight aggregation
TOP_CATEGORY_LIMIT = 5
TREND_WINDOW_SIZE = 10  # Last N responses form the "recent" window
TREND_THRESHOLD = 0.1  # Minimum change in positive share to call a trend

# Response registry
MODIFICATION_HISTORY_LIMIT = 10

# Logging
LOG_LEVEL = os.getenv("FEEDBACKPULSE_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "feedbackpulse.log"
