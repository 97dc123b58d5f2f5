"""wikibot — multi-step MediaWiki actions: version gating, tokens, continuation."""

from wikibot.config import CONFIG, BotConfig, __version__
from wikibot.context import BotContext
from wikibot.domain import (
    Article,
    CategoryMembers,
    CompositeAction,
    ConfigurationError,
    DeletePage,
    DomainError,
    EditPage,
    MalformedResponse,
    ReadPage,
    SequenceExhausted,
    TokenError,
    TransportError,
    Version,
    WikiBotError,
)
from wikibot.bot import MediaWikiBot

__all__ = [
    "__version__",
    "CONFIG",
    "BotConfig",
    "BotContext",
    "Article",
    "CategoryMembers",
    "CompositeAction",
    "ConfigurationError",
    "DeletePage",
    "DomainError",
    "EditPage",
    "MalformedResponse",
    "ReadPage",
    "SequenceExhausted",
    "TokenError",
    "TransportError",
    "Version",
    "WikiBotError",
    "MediaWikiBot",
]
