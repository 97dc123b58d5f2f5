"""Userinfo and siteinfo queries (meta=...)."""

from typing import TYPE_CHECKING, Optional

from wikibot.domain.actions.common import require_attr, require_child
from wikibot.domain.capabilities import supported_by, versions_between
from wikibot.domain.models import (
    ActionRequest,
    HandlerResult,
    HttpMethod,
    Siteinfo,
    Token,
    Userinfo,
    Version,
)
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext


def _texts(node: Optional[ResponseNode], item: str):
    if node is None:
        return frozenset()
    return frozenset(child.text.strip() for child in node.children(item) if child.text.strip())


@supported_by(*versions_between(Version.MW1_09, Version.MW1_20), Version.DEVELOPMENT)
class GetUserinfo:
    """Name, groups and rights of the user the session is logged in as."""

    kind = "userinfo"
    token_kind = None
    continues = False
    token_scope = ""

    def check_preconditions(self, context: "BotContext"):
        pass

    def build_request(self, token: Optional[Token]) -> ActionRequest:
        return ActionRequest.build(HttpMethod.GET, [
            ("action", "query"),
            ("meta", "userinfo"),
            ("uiprop", "rights|groups"),
        ])

    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult:
        node = require_child(root, "query", "userinfo")
        return HandlerResult(Userinfo(
            name=require_attr(node, "name"),
            groups=_texts(node.child("groups"), "g"),
            rights=_texts(node.child("rights"), "r"),
        ))


# Runs before the version is known, so every version (even UNKNOWN) allows it.
@supported_by(*Version)
class GetSiteinfo:
    kind = "siteinfo"
    token_kind = None
    continues = False
    token_scope = ""

    def check_preconditions(self, context: "BotContext"):
        pass

    def build_request(self, token: Optional[Token]) -> ActionRequest:
        return ActionRequest.build(HttpMethod.GET, [
            ("action", "query"),
            ("meta", "siteinfo"),
            ("siprop", "general"),
        ])

    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult:
        general = require_child(root, "query", "general")
        generator = require_attr(general, "generator")
        version = Version.from_generator(generator)
        context.debug(f"Wiki reports {generator!r} -> {version.label}")
        return HandlerResult(Siteinfo(
            sitename=general.attr("sitename") or "",
            generator=generator,
            version=version,
        ))
