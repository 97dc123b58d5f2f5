"""Outbound ports — interfaces for the collaborators the core talks to."""

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

from wikibot.domain.models import ActionRequest, HandlerResult, Token, TokenKind

if TYPE_CHECKING:
    from wikibot.context import BotContext


@runtime_checkable
class ResponseNode(Protocol):
    """Queryable node of an already-parsed response document."""

    @property
    def name(self) -> str: ...

    @property
    def text(self) -> str: ...

    def child(self, name: str) -> Optional["ResponseNode"]: ...
    def children(self, name: Optional[str] = None) -> List["ResponseNode"]: ...
    def attr(self, key: str) -> Optional[str]: ...
    def attrs(self) -> dict: ...


@runtime_checkable
class ParserPort(Protocol):
    """Turns a raw response body into a ResponseNode tree (the root)."""

    def parse(self, raw: str) -> ResponseNode: ...


@runtime_checkable
class TransportPort(Protocol):
    """Performs one HTTP exchange and returns the raw body."""

    async def send(self, request: ActionRequest) -> str: ...
    async def close(self) -> None: ...


@runtime_checkable
class ActionHandler(Protocol):
    """One tagged action variant.

    Declares its token needs and builds/consumes its own wire requests;
    sequencing and error classification live in CompositeAction.
    """

    kind: str
    token_kind: Optional[TokenKind]
    continues: bool

    @property
    def token_scope(self) -> str: ...

    def check_preconditions(self, context: "BotContext") -> None: ...
    def build_request(self, token: Optional[Token]) -> ActionRequest: ...
    def consume_response(self, root: ResponseNode, context: "BotContext") -> HandlerResult: ...
