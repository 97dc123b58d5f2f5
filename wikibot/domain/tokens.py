"""One-time security token fetch that precedes a write."""

from typing import Optional

from wikibot.domain.errors import SequenceExhausted, TokenError
from wikibot.domain.models import ActionRequest, HttpMethod, Token, TokenKind
from wikibot.ports.outbound import ResponseNode

# What MediaWiki hands out to sessions that are not logged in
ANONYMOUS_TOKEN = "+\\"


class TokenAcquisition:
    """Single-request sub-action: ask for a `kind` token scoped to one page.

    Owned by exactly one composite action. Its response is consumed once;
    a second consume is misuse.
    """

    def __init__(self, kind: TokenKind, scope: str):
        self.kind = kind
        self.scope = scope
        self._token: Optional[Token] = None

    @property
    def token(self) -> Optional[Token]:
        return self._token

    def build_request(self) -> ActionRequest:
        return ActionRequest.build(HttpMethod.GET, [
            ("action", "query"),
            ("prop", "info"),
            ("intoken", self.kind.value),
            ("titles", self.scope),
        ])

    def consume_response(self, root: ResponseNode) -> Token:
        if self._token is not None:
            raise SequenceExhausted(f"{self.kind.value} token for {self.scope!r} already consumed")

        page = None
        query = root.child("query")
        pages = query.child("pages") if query is not None else None
        if pages is not None:
            page = pages.child("page")
        value = page.attr(f"{self.kind.value}token") if page is not None else None

        if not value:
            raise TokenError(
                f"No {self.kind.value} token returned for {self.scope!r}; "
                "the user may lack the right or the wiki speaks another protocol"
            )
        if value == ANONYMOUS_TOKEN:
            raise TokenError(
                f"Got the anonymous {self.kind.value} token for {self.scope!r}; log in first"
            )

        self._token = Token(kind=self.kind, scope=self.scope, value=value)
        return self._token
