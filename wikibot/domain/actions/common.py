"""Helpers shared by the action handlers."""

from typing import TYPE_CHECKING, Optional

from wikibot.domain.errors import ConfigurationError, MalformedResponse
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext


def require_title(title: Optional[str], argument: str = "title") -> str:
    if title is None or not title.strip():
        raise ConfigurationError(f"The argument '{argument}' must not be null or empty")
    return title


def require_right(context: "BotContext", right: str, kind: str, hint: str = ""):
    """Fail before any request when the logged-in user lacks `right`."""
    if context.userinfo is None:
        raise ConfigurationError(
            f"Rights of the current user are unknown; fetch userinfo before building '{kind}'"
        )
    if not context.userinfo.has_right(right):
        message = f"The given user doesn't have the rights to {right} (missing right '{right}')."
        if hint:
            message += " " + hint
        raise ConfigurationError(message)


def require_child(node: ResponseNode, *path: str) -> ResponseNode:
    """Walk `path` below node or raise MalformedResponse naming the missing step."""
    current = node
    for name in path:
        found = current.child(name)
        if found is None:
            raise MalformedResponse(f"Expected <{name}> below <{current.name}>")
        current = found
    return current


def require_attr(node: ResponseNode, key: str) -> str:
    value = node.attr(key)
    if value is None:
        raise MalformedResponse(f"Expected attribute '{key}' on <{node.name}>")
    return value
