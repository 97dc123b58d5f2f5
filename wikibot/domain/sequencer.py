"""Composite action: token step, primary step, continuation steps.

The caller drives it one request at a time:

    action = CompositeAction(DeletePage("Foo"), context)
    while action.has_next():
        request = action.next()
        root = parser.parse(await transport.send(request))
        outcome = action.process(request, root)
        if isinstance(outcome, Failed):
            raise outcome.error
"""

from typing import TYPE_CHECKING, Any, List, Optional

from wikibot.domain.capabilities import CAPABILITIES, CapabilityTable
from wikibot.domain.classifier import ErrorClassifier
from wikibot.domain.errors import (
    MalformedResponse,
    SequenceExhausted,
    SequenceMisuse,
    TokenError,
    WikiBotError,
)
from wikibot.domain.models import (
    ActionRequest,
    Continue,
    DomainResult,
    Failed,
    Params,
    SequenceState,
    StepOutcome,
    Token,
)
from wikibot.domain.tokens import TokenAcquisition
from wikibot.ports.outbound import ActionHandler, ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext


def describe(request: ActionRequest) -> str:
    """Loggable form of a request with the token value masked."""
    shown = [(k, "***" if k == "token" else v) for k, v in request.params]
    return f"{request.method.value} {request.path}?" + "&".join(f"{k}={v}" for k, v in shown)


class CompositeAction:
    """Sequencer and response processor for one logical wiki operation.

    Not thread-safe and not reusable: one instance per operation, one
    outstanding request at a time, one state transition per response.
    """

    def __init__(
        self,
        handler: ActionHandler,
        context: "BotContext",
        capabilities: CapabilityTable = CAPABILITIES,
        classifier: Optional[ErrorClassifier] = None,
    ):
        capabilities.require(handler.kind, context.version)
        handler.check_preconditions(context)

        self.handler = handler
        self._context = context
        self._classifier = classifier or ErrorClassifier(context)
        self._token_step: Optional[TokenAcquisition] = None
        if handler.token_kind is not None:
            self._token_step = TokenAcquisition(handler.token_kind, handler.token_scope)

        self._state = (
            SequenceState.AWAITING_TOKEN
            if self._token_step is not None
            else SequenceState.AWAITING_PRIMARY
        )
        self._outstanding: Optional[ActionRequest] = None
        self._primary: Optional[ActionRequest] = None
        self._token: Optional[Token] = None
        self._continuation: Params = ()
        self._items: List[Any] = []
        self._last_page: List[Any] = []
        self._result: Any = None
        self._error: Optional[WikiBotError] = None

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def result(self) -> Any:
        return self._result

    @property
    def error(self) -> Optional[WikiBotError]:
        return self._error

    @property
    def token(self) -> Optional[Token]:
        return self._token

    @property
    def last_page(self) -> List[Any]:
        """Items extracted from the latest response of a listing action."""
        return list(self._last_page)

    def has_next(self) -> bool:
        """True when `next()` may be called now.

        Also False while a request is outstanding: process its response
        first. Use `state is SequenceState.DONE` to tell whether the
        action has finished.
        """
        return self._state is not SequenceState.DONE and self._outstanding is None

    def next(self) -> ActionRequest:
        if self._state is SequenceState.DONE:
            raise SequenceExhausted(f"{self.handler.kind}: no more requests")
        if self._outstanding is not None:
            raise SequenceMisuse(
                f"{self.handler.kind}: the previous response has not been processed"
            )

        if self._state is SequenceState.AWAITING_TOKEN:
            request = self._token_step.build_request()
        elif self._state is SequenceState.AWAITING_PRIMARY:
            request = self._build_primary()
        else:
            request = self._primary.with_params(self._continuation)

        self._outstanding = request
        self._context.debug(f"{self.handler.kind}: {describe(request)}")
        return request

    def _build_primary(self) -> ActionRequest:
        token = None
        if self._token_step is not None:
            token = self._token_step.token
            if token is None or not token.value or not token.fresh:
                raise TokenError(f"{self.handler.kind}: no usable token for the primary request")
        request = self.handler.build_request(token)
        if token is not None:
            self._token = token.spent()
        self._primary = request
        return request

    def process(self, request: ActionRequest, root: ResponseNode) -> StepOutcome:
        """Advance exactly one step with the parsed response to `request`."""
        if self._state is SequenceState.DONE:
            raise SequenceExhausted(f"{self.handler.kind}: already done")
        if self._outstanding is None or request != self._outstanding:
            raise SequenceMisuse(
                f"{self.handler.kind}: response does not belong to the outstanding request"
            )
        self._outstanding = None

        error = self._classifier.extract_error(root)
        if error is not None:
            return self._fail(error)

        if self._state is SequenceState.AWAITING_TOKEN:
            try:
                self._token = self._token_step.consume_response(root)
            except TokenError as e:
                return self._fail(e)
            self._state = SequenceState.AWAITING_PRIMARY
            return Continue(SequenceState.AWAITING_PRIMARY)

        try:
            page = self.handler.consume_response(root, self._context)
        except MalformedResponse as e:
            return self._fail(e)
        except Exception:
            # any handler failure ends the sequence
            self._state = SequenceState.DONE
            raise

        if not self.handler.continues:
            return self._finish(page.value)

        self._last_page = list(page.value)
        self._items.extend(self._last_page)
        if page.continuation:
            self._continuation = page.continuation
            self._state = SequenceState.AWAITING_CONTINUATION
            return Continue(SequenceState.AWAITING_CONTINUATION, partial=list(self._last_page))
        return self._finish(list(self._items))

    def abort(self, request: ActionRequest, error: WikiBotError) -> Failed:
        """End the sequence when the response to `request` could not be parsed."""
        if self._state is SequenceState.DONE:
            raise SequenceExhausted(f"{self.handler.kind}: already done")
        if self._outstanding is None or request != self._outstanding:
            raise SequenceMisuse(
                f"{self.handler.kind}: response does not belong to the outstanding request"
            )
        self._outstanding = None
        return self._fail(error)

    def _finish(self, value: Any) -> DomainResult:
        self._state = SequenceState.DONE
        self._result = value
        return DomainResult(value)

    def _fail(self, error: WikiBotError) -> Failed:
        self._state = SequenceState.DONE
        self._error = error
        self._context.log(f"{self.handler.kind} failed: {error}")
        return Failed(error)
