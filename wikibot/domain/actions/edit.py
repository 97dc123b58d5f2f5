"""Write page content via action=edit."""

from typing import TYPE_CHECKING, Optional

from wikibot.domain.actions.common import require_attr, require_child, require_right, require_title
from wikibot.domain.capabilities import supported_by, versions_between
from wikibot.domain.classifier import REMEDIATION_HINTS
from wikibot.domain.models import (
    ActionRequest,
    Article,
    EditResult,
    HandlerResult,
    HttpMethod,
    Token,
    TokenKind,
    Version,
)
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext


@supported_by(*versions_between(Version.MW1_13, Version.MW1_20))
class EditPage:
    kind = "edit"
    token_kind = TokenKind.EDIT
    continues = False

    def __init__(self, article: Article, summary: str = "", minor: bool = False, bot: bool = True):
        require_title(article.title)
        self.article = article
        self.summary = summary or article.summary
        self.minor = minor
        self.bot = bot

    @property
    def token_scope(self) -> str:
        return self.article.title

    def check_preconditions(self, context: "BotContext"):
        require_right(context, "edit", self.kind, REMEDIATION_HINTS["noedit"])

    def build_request(self, token: Optional[Token]) -> ActionRequest:
        # basetimestamp lets the wiki detect edit conflicts with the revision we read
        return ActionRequest.build(HttpMethod.POST, [
            ("action", "edit"),
            ("title", self.article.title),
            ("text", self.article.text),
            ("summary", self.summary or None),
            ("minor" if self.minor else "notminor", "1"),
            ("bot", "1" if self.bot else None),
            ("basetimestamp", self.article.timestamp or None),
            ("token", token.value),
        ])

    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult:
        node = require_child(root, "edit")
        result = require_attr(node, "result")
        title = node.attr("title") or self.article.title
        new_revid = node.attr("newrevid")
        if result == "Success":
            if node.attr("nochange") is not None:
                context.log(f"Edit of '{title}' changed nothing")
            else:
                context.log(f"Edited '{title}' (revision {new_revid})")
        else:
            context.log(f"Edit of '{title}' returned {result}")
        return HandlerResult(EditResult(title=title, result=result, new_revid=new_revid))
