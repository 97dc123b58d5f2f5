"""Page deletion via the API's action=delete.

To let the bot delete pages, the wiki's LocalSettings.php needs:

    $wgEnableWriteAPI = true;
    $wgGroupPermissions['bot']['delete'] = true;
"""

from typing import TYPE_CHECKING, Optional

from wikibot.domain.actions.common import require_attr, require_right, require_title
from wikibot.domain.capabilities import supported_by, versions_between
from wikibot.domain.classifier import REMEDIATION_HINTS
from wikibot.domain.errors import MalformedResponse
from wikibot.domain.models import (
    ActionRequest,
    DeleteResult,
    HandlerResult,
    HttpMethod,
    Token,
    TokenKind,
    Version,
)
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext


@supported_by(*versions_between(Version.MW1_15, Version.MW1_20))
class DeletePage:
    kind = "delete"
    token_kind = TokenKind.DELETE
    continues = False

    def __init__(self, title: str, reason: Optional[str] = None):
        self.title = require_title(title)
        self.reason = reason

    @property
    def token_scope(self) -> str:
        return self.title

    def check_preconditions(self, context: "BotContext"):
        require_right(context, "delete", self.kind, REMEDIATION_HINTS["permissiondenied"])

    def build_request(self, token: Optional[Token]) -> ActionRequest:
        return ActionRequest.build(HttpMethod.POST, [
            ("action", "delete"),
            ("title", self.title),
            ("reason", self.reason),
            ("token", token.value),
        ])

    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult:
        node = root.child("delete")
        if node is None:
            raise MalformedResponse("Unknown reply. This is not a reply for a delete action.")
        title = require_attr(node, "title")
        reason = node.attr("reason")
        context.log(f"Deleted article '{title}' with reason '{reason}'")
        return HandlerResult(DeleteResult(title=title, reason=reason))
