"""Error taxonomy for composite wiki actions."""

from typing import Optional


class WikiBotError(Exception):
    """Root of all classified wikibot failures."""
    pass


class ConfigurationError(WikiBotError):
    """Action unsupported by the negotiated version, or a construction precondition failed.

    Always raised before any request is issued.
    """
    pass


class TokenError(WikiBotError):
    """Token missing or empty after the token-fetch step. Never retried."""
    pass


class MalformedResponse(WikiBotError):
    """A success response lacks a field the wire contract guarantees."""
    pass


class SequenceMisuse(WikiBotError):
    """Steps of a composite action were driven out of order."""
    pass


class SequenceExhausted(SequenceMisuse):
    """A step was requested after the composite action reached Done."""
    pass


class TransportError(WikiBotError):
    """HTTP-level failure reported by the transport adapter."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class DomainError(WikiBotError):
    """Structured rejection reported by the wiki itself."""

    def __init__(self, code: str, info: str = "", hint: Optional[str] = None):
        self.code = code
        self.info = info
        self.hint = hint
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"{self.code}: {self.info}" if self.info else self.code
        if self.hint:
            text += f" ({self.hint})"
        return text

    def with_hint(self, hint: Optional[str]) -> "DomainError":
        return DomainError(self.code, self.info, hint)

    def __eq__(self, other):
        if not isinstance(other, DomainError):
            return NotImplemented
        return (self.code, self.info) == (other.code, other.info)

    def __hash__(self):
        return hash((self.code, self.info))
