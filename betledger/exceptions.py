"""Exceptions raised by the bet ledger's external collaborators."""


class BetledgerError(Exception):
    """Base class for bet ledger errors."""


class StoreError(BetledgerError):
    """The bet store export could not be read."""


class RecognitionError(BetledgerError):
    """The text recognition service failed."""


class FallbackError(BetledgerError):
    """The AI fallback failed or returned something unusable."""


class RateLimitError(FallbackError):
    """The AI fallback refused the call because of rate limiting."""
