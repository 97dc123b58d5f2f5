"""Domain layer — pure Python, no framework dependencies."""

from wikibot.domain.errors import (
    ConfigurationError,
    DomainError,
    MalformedResponse,
    SequenceExhausted,
    SequenceMisuse,
    TokenError,
    TransportError,
    WikiBotError,
)
from wikibot.domain.models import (
    ActionRequest,
    Article,
    Continue,
    DeleteResult,
    DomainResult,
    EditResult,
    Failed,
    HttpMethod,
    SequenceState,
    Siteinfo,
    Token,
    TokenKind,
    Userinfo,
    Version,
)
from wikibot.domain.capabilities import CAPABILITIES, CapabilityTable, supported_by
from wikibot.domain.classifier import REMEDIATION_HINTS, ErrorClassifier
from wikibot.domain.tokens import TokenAcquisition
from wikibot.domain.sequencer import CompositeAction
from wikibot.domain.actions import (
    CategoryMembers,
    DeletePage,
    EditPage,
    GetSiteinfo,
    GetUserinfo,
    ReadPage,
)

__all__ = [
    "ConfigurationError",
    "DomainError",
    "MalformedResponse",
    "SequenceExhausted",
    "SequenceMisuse",
    "TokenError",
    "TransportError",
    "WikiBotError",
    "ActionRequest",
    "Article",
    "Continue",
    "DeleteResult",
    "DomainResult",
    "EditResult",
    "Failed",
    "HttpMethod",
    "SequenceState",
    "Siteinfo",
    "Token",
    "TokenKind",
    "Userinfo",
    "Version",
    "CAPABILITIES",
    "CapabilityTable",
    "supported_by",
    "REMEDIATION_HINTS",
    "ErrorClassifier",
    "TokenAcquisition",
    "CompositeAction",
    "CategoryMembers",
    "DeletePage",
    "EditPage",
    "GetSiteinfo",
    "GetUserinfo",
    "ReadPage",
]
