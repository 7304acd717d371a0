"""Chat agent orchestration for natural-language questions.

The ``ChatAgent`` keeps the chat transcript for one session and answers
each question with the rule-based responder in ``intents``.  Answers are
delivered after a configurable delay that models a backend round trip.
Only one question may be pending at a time: while an answer is being
prepared ``processing`` is set and further questions are rejected, which
keeps transcript entries in strict submission order.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .dataset import Dataset
from .exceptions import QueryInProgress
from .intents import match_intent

log = logging.getLogger(__name__)

GREETING = (
    "Hello! I'm your AI data analyst. Ask me anything about your dataset and I'll help "
    "you explore, visualize, and understand your data."
)

SUGGESTED_QUERIES = [
    "Show me a bar chart of sales by region",
    "What are the top 5 products by revenue?",
    "Create a correlation matrix for all numeric columns",
    "Generate a summary report of the dataset",
    "Identify outliers in the data",
    "Build a simple classification model",
]


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" or "ai"
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


def _greeting() -> List[ChatMessage]:
    return [ChatMessage("ai", GREETING)]


@dataclass
class ChatAgent:
    """Natural-language interface over the active dataset.

    Parameters
    ----------
    dataset : Dataset, optional
        Dataset the questions refer to.  ``None`` is allowed; responses then
        use placeholder values.
    response_delay : float, optional
        Seconds to wait before answering.
    debug : bool, optional
        If True, logs the matched intent at INFO instead of DEBUG.
    """

    dataset: Optional[Dataset] = None
    response_delay: float = 2.0
    debug: bool = False
    history: List[ChatMessage] = field(default_factory=_greeting)
    processing: bool = False

    def answer(self, question: str) -> str:
        """Return the response text for ``question`` without delay or transcript."""
        intent = match_intent(question)
        log.log(logging.INFO if self.debug else logging.DEBUG, "Question matched intent %r", intent.name)
        return intent.render(self.dataset)

    async def ask(self, question: str) -> Optional[str]:
        """Answer a question about the dataset after the response delay.

        Blank questions are ignored and return ``None``.

        Raises
        ------
        QueryInProgress
            If a previous question is still being answered.
        """
        if not question or not question.strip():
            return None
        if self.processing:
            raise QueryInProgress("A question is already being processed.")
        self.history.append(ChatMessage("user", question))
        self.processing = True
        try:
            await asyncio.sleep(self.response_delay)
            # answer against the dataset active when the reply is produced
            response = self.answer(question)
            self.history.append(ChatMessage("ai", response))
            return response
        finally:
            self.processing = False

    def ask_sync(self, question: str) -> Optional[str]:
        """Blocking wrapper around ``ask`` for synchronous callers."""
        return asyncio.run(self.ask(question))
