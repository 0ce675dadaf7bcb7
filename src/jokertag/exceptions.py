"""Custom exceptions for the JokerTag pipeline."""

from typing import Optional


class JokerTagError(Exception):
    """Base exception class for JokerTag errors.

    Attributes:
        code (str): Error code for identifying the error type
        message (str): Descriptive error message
        details (dict): Additional error context and details
    """

    def __init__(self, message: str, code: str = "JOKERTAG_ERR", details: Optional[dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Format the error message with code and details."""
        error_msg = f"[{self.code}] {self.message}"
        if self.details:
            error_msg += f"\nDetails: {self.details}"
        return error_msg


class DuplicateKeyError(JokerTagError):
    """Raised when two input cards share the same name."""

    def __init__(self, name: str, details: Optional[dict] = None):
        self.name = name
        message = f"Duplicate card name in catalog: '{name}'"
        super().__init__(message, code="DUPLICATE_CARD", details=details)


class CardNotFoundError(JokerTagError, KeyError):
    """Raised when a card lookup uses a name the catalog does not hold."""

    def __init__(self, name: str, details: Optional[dict] = None):
        self.name = name
        message = f"Card not found in catalog: '{name}'"
        super().__init__(message, code="CARD_NOT_FOUND", details=details)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return JokerTagError.__str__(self)


class InvalidRuleError(JokerTagError):
    """Raised when a tag rule entry cannot be turned into a matcher.

    Rule problems always surface while the rule set is being built, never
    while cards are being tagged.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="INVALID_RULE", details=details)


class InvalidCardError(JokerTagError):
    """Raised when an input row cannot be turned into a card."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="INVALID_CARD", details=details)
