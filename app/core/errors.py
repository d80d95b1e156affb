"""
Internal errors for the search pipeline.

Neither error crosses the pipeline boundary: source adapters turn
SourceUnavailableError into "no result", and the intent oracle / summarizer
turn LLMUnavailableError into their fixed defaults.
"""


class SourceUnavailableError(Exception):
    """Raised when an information source is misconfigured, unreachable, or answers with an unusable payload."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LLMUnavailableError(Exception):
    """Raised when the chat-completion endpoint cannot produce an answer (no key, HTTP error, bad shape)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
