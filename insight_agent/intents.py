"""Rule-based intent classification for free-text questions.

Intents are checked in the order of ``INTENTS``; the first whose keywords
appear in the lower-cased question wins and renders its template.  Adding
an intent means adding a row to the table, so the priority stays explicit.
Bump ``INTENTS_VERSION`` whenever keywords, order or template text change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .dataset import Dataset

INTENTS_VERSION = "1"

DEFAULT_NAME = "current dataset"


@dataclass(frozen=True)
class Intent:
    name: str
    keywords: Tuple[str, ...]
    render: Callable[[Optional[Dataset]], str]

    def matches(self, lowered_query: str) -> bool:
        return any(k in lowered_query for k in self.keywords)


def _name(dataset: Optional[Dataset], default: str = DEFAULT_NAME) -> str:
    return dataset.name if dataset is not None and dataset.name else default


def _rows(dataset: Optional[Dataset]) -> int:
    return dataset.row_count if dataset is not None else 0


def _visualization(dataset: Optional[Dataset]) -> str:
    return (
        f'I can help you create visualizations! Based on your dataset "{_name(dataset)}", '
        "I recommend starting with a bar chart or line chart. "
        f"Your dataset has {_rows(dataset)} rows and contains both categorical and "
        "numerical data perfect for visualization."
    )


def _summary(dataset: Optional[Dataset]) -> str:
    columns = len(dataset.columns) if dataset is not None else 0
    source = dataset.source_kind if dataset is not None and dataset.source_kind else "Unknown"
    return (
        "Here's a summary of your dataset:\n\n"
        "📊 **Dataset Overview:**\n"
        f"- Name: {_name(dataset, 'Unknown')}\n"
        f"- Rows: {_rows(dataset)}\n"
        f"- Columns: {columns}\n"
        f"- Type: {source}\n\n"
        "The data appears to be well-structured and ready for analysis. "
        "What specific insights would you like me to explore?"
    )


def _modeling(dataset: Optional[Dataset]) -> str:
    return (
        "Great question about machine learning! Based on your dataset, "
        "I can suggest several approaches:\n\n"
        "🤖 **Possible Models:**\n"
        "- Classification: If you have categorical target variables\n"
        "- Regression: For predicting numerical values\n"
        "- Clustering: To find hidden patterns in your data\n\n"
        "To get started, could you tell me what you're trying to predict or discover in your data?"
    )


def _outliers(dataset: Optional[Dataset]) -> str:
    return (
        "I'll analyze your data for outliers! Looking at the numerical columns in your "
        "dataset, I can identify data points that fall significantly outside the normal "
        "range. This is crucial for data quality and can reveal interesting insights or "
        "data entry errors."
    )


def _fallback(dataset: Optional[Dataset]) -> str:
    return (
        "That's an interesting question about your dataset! While I'm processing your "
        "request, here are some insights I can provide:\n\n"
        f'✨ Your dataset "{_name(dataset)}" contains {_rows(dataset)} records with rich '
        "information for analysis.\n\n"
        "I can help you with:\n"
        "- Creating custom visualizations\n"
        "- Statistical analysis\n"
        "- Pattern recognition\n"
        "- Data quality assessment\n"
        "- Predictive modeling\n\n"
        "What specific aspect would you like to explore further?"
    )


INTENTS: Tuple[Intent, ...] = (
    Intent("visualization", ("chart", "visualize"), _visualization),
    Intent("summary", ("summary", "overview"), _summary),
    Intent("modeling", ("model", "machine learning"), _modeling),
    Intent("outliers", ("outlier", "anomaly"), _outliers),
)

FALLBACK = Intent("fallback", (), _fallback)


def match_intent(query_text: str) -> Intent:
    lowered = (query_text or "").lower()
    for intent in INTENTS:
        if intent.matches(lowered):
            return intent
    return FALLBACK


def classify_intent(query_text: str) -> str:
    """Return the name of the intent that ``query_text`` falls into."""
    return match_intent(query_text).name


def respond(query_text: str, dataset: Optional[Dataset] = None) -> str:
    """Render the response template for ``query_text``.

    Deterministic and total: a missing dataset renders placeholder values.
    """
    return match_intent(query_text).render(dataset)
