"""Port interfaces (Hexagonal Architecture)."""

from wikibot.ports.outbound import ActionHandler, ParserPort, ResponseNode, TransportPort

__all__ = [
    "ActionHandler",
    "ParserPort",
    "ResponseNode",
    "TransportPort",
]
