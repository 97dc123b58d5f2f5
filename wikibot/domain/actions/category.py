"""List the members of a category, page by page."""

from typing import TYPE_CHECKING, Optional, Sequence

from wikibot.domain.actions.common import require_attr, require_child, require_title
from wikibot.domain.capabilities import supported_by, versions_between
from wikibot.domain.models import (
    ActionRequest,
    HandlerResult,
    HttpMethod,
    Params,
    Token,
    Version,
)
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext

CATEGORY_PREFIX = "Category:"
DEFAULT_LIMIT = 50


def continuation_params(root: ResponseNode, module: str) -> Params:
    """Continuation marker of a list response, as params to replay.

    Older wikis answer with <query-continue><module .../></query-continue>;
    newer ones with a top-level <continue .../> whose attributes all go back.
    """
    legacy = root.child("query-continue")
    if legacy is not None:
        node = legacy.child(module)
        if node is not None:
            return tuple(node.attrs().items())
    current = root.child("continue")
    if current is not None:
        return tuple(current.attrs().items())
    return ()


@supported_by(*versions_between(Version.MW1_11, Version.MW1_20), Version.DEVELOPMENT)
class CategoryMembers:
    kind = "categorymembers"
    token_kind = None
    continues = True

    def __init__(self, category: str, namespaces: Sequence[int] = (), limit: int = DEFAULT_LIMIT):
        require_title(category, "category")
        if not category.startswith(CATEGORY_PREFIX):
            category = CATEGORY_PREFIX + category
        self.category = category
        self.namespaces = tuple(namespaces)
        self.limit = max(1, limit)

    @property
    def token_scope(self) -> str:
        return self.category

    def check_preconditions(self, context: "BotContext"):
        pass

    def build_request(self, token: Optional[Token]) -> ActionRequest:
        namespaces = "|".join(str(ns) for ns in self.namespaces) or None
        return ActionRequest.build(HttpMethod.GET, [
            ("action", "query"),
            ("list", "categorymembers"),
            ("cmtitle", self.category),
            ("cmlimit", str(self.limit)),
            ("cmnamespace", namespaces),
        ])

    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult:
        members = require_child(root, "query", "categorymembers")
        titles = [require_attr(cm, "title") for cm in members.children("cm")]
        continuation = continuation_params(root, "categorymembers")
        context.debug(f"{self.category}: {len(titles)} members, more={bool(continuation)}")
        return HandlerResult(titles, continuation)
