"""Custom exceptions for Mailcraft services."""


class GenerationError(Exception):
    """Raised when a suggestion engine cannot produce a reply.

    The conversation store catches this (and any other engine failure) and
    turns it into a plain-language assistant message.

    Attributes:
        reason: Short machine-readable cause (e.g. "empty_response")
        message: Human-readable error message
    """

    def __init__(self, reason: str, message: str = "Suggestion generation failed"):
        """Initialize GenerationError.

        Args:
            reason: Short machine-readable cause
            message: Human-readable error message
        """
        self.reason = reason
        self.message = message
        super().__init__(f"{message}: {reason}")
