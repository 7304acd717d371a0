"""Custom exceptions for the insight agent.

Ingestion errors carry a short machine-readable ``code`` so that the
ingestion boundary in ``app_state`` can turn them into user-facing
notifications without inspecting message text.
"""


class InsightError(Exception):
    """Base exception for the insight agent."""
    pass


class IngestionError(InsightError):
    """Raised when an upload or scrape cannot produce a dataset."""

    code = "ingestion-error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)


class ParseError(IngestionError):
    """Raised when raw text cannot be turned into records."""

    code = "parse-error"


class InvalidFileType(ParseError):
    """Raised before parsing when the file name and content type are not accepted."""

    code = "unsupported-type"


class InvalidJson(ParseError):
    """Raised when a JSON upload is not valid JSON."""

    code = "invalid-json"


class EmptyInput(IngestionError):
    """Raised when a scrape is requested without a URL."""

    code = "url-required"


class ReadFailure(IngestionError):
    """Raised when the uploaded content did not yield text."""

    code = "read-failure"


class QueryInProgress(InsightError):
    """Raised when a question is submitted while another is still pending."""
    pass
