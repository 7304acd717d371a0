"""Top-level package for the insight agent.

This package turns an uploaded CSV or JSON file (or a placeholder web
extraction) into an immutable dataset, classifies its columns, computes
summary statistics, derives chart-ready projections and answers free-text
questions with a rule-based responder.  See README.md in the project root
for installation and usage instructions.
"""

from .agent import ChatAgent
from .app_state import AppState, Notification
from .charts import NO_DATA, ChartData, project
from .config import Settings
from .data_handler import ColumnStats, DataHandler, classify_columns, compute_stats
from .dataset import Dataset, create_dataset
from .intents import classify_intent, respond
from .parser import parse, parse_upload

__all__ = [
    "AppState",
    "ChartData",
    "ChatAgent",
    "ColumnStats",
    "DataHandler",
    "Dataset",
    "NO_DATA",
    "Notification",
    "Settings",
    "classify_columns",
    "classify_intent",
    "compute_stats",
    "create_dataset",
    "parse",
    "parse_upload",
    "project",
    "respond",
]
