"""Read the latest revision of a page."""

from typing import TYPE_CHECKING, Optional

from wikibot.domain.actions.common import require_child, require_title
from wikibot.domain.capabilities import supported_by, versions_between
from wikibot.domain.models import (
    ActionRequest,
    Article,
    HandlerResult,
    HttpMethod,
    Token,
    Version,
)
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext

REVISION_PROPS = "content|timestamp|user|comment"


@supported_by(*versions_between(Version.MW1_09, Version.MW1_20), Version.DEVELOPMENT)
class ReadPage:
    kind = "read"
    token_kind = None
    continues = False

    def __init__(self, title: str):
        self.title = require_title(title)

    @property
    def token_scope(self) -> str:
        return self.title

    def check_preconditions(self, context: "BotContext"):
        pass

    def build_request(self, token: Optional[Token]) -> ActionRequest:
        return ActionRequest.build(HttpMethod.GET, [
            ("action", "query"),
            ("prop", "revisions"),
            ("titles", self.title),
            ("rvprop", REVISION_PROPS),
        ])

    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult:
        page = require_child(root, "query", "pages", "page")
        title = page.attr("title") or self.title
        if page.attr("missing") is not None or page.attr("invalid") is not None:
            context.debug(f"'{title}' does not exist")
            return HandlerResult(Article(title=title, missing=True))

        rev = require_child(page, "revisions", "rev")
        return HandlerResult(Article(
            title=title,
            text=rev.text,
            user=rev.attr("user") or "",
            timestamp=rev.attr("timestamp") or "",
            summary=rev.attr("comment") or "",
        ))
