"""MediaWikiBot — drives composite actions over a transport and a parser."""

from typing import Any, AsyncIterator, Mapping, Optional, Sequence

from wikibot.adapters.http.aiohttp_transport import AiohttpTransport
from wikibot.adapters.xml.etree_parser import EtreeParser
from wikibot.config import BotConfig
from wikibot.context import BotContext
from wikibot.domain.actions import (
    CategoryMembers,
    DeletePage,
    EditPage,
    GetSiteinfo,
    GetUserinfo,
    ReadPage,
)
from wikibot.domain.classifier import ErrorClassifier
from wikibot.domain.errors import MalformedResponse
from wikibot.domain.models import (
    Article,
    DeleteResult,
    EditResult,
    Failed,
    Siteinfo,
    StepOutcome,
    Userinfo,
    Version,
)
from wikibot.domain.sequencer import CompositeAction
from wikibot.ports.outbound import ActionHandler, ParserPort, TransportPort


class MediaWikiBot:
    """One bot session against one wiki.

    Version and userinfo are looked up lazily, once, and kept on the
    session's BotContext. Login is up to the transport's session.
    """

    def __init__(
        self,
        transport: Optional[TransportPort] = None,
        parser: Optional[ParserPort] = None,
        config: Optional[BotConfig] = None,
        context: Optional[BotContext] = None,
        hints: Optional[Mapping[str, str]] = None,
    ):
        self.config = config or BotConfig.from_env()
        self.context = context or BotContext.from_config(self.config)
        self._transport = transport or AiohttpTransport(self.config)
        self._parser = parser or EtreeParser()
        self._classifier = ErrorClassifier(self.context, hints)
        self._siteinfo: Optional[Siteinfo] = None

    @property
    def wiki_type(self) -> str:
        return f"MediaWiki {self.context.version.label}"

    def build(self, handler: ActionHandler) -> CompositeAction:
        return CompositeAction(handler, self.context, classifier=self._classifier)

    async def _step(self, action: CompositeAction) -> StepOutcome:
        request = action.next()
        raw = await self._transport.send(request)
        try:
            root = self._parser.parse(raw)
        except MalformedResponse as e:
            action.abort(request, e)
            raise
        outcome = action.process(request, root)
        if isinstance(outcome, Failed):
            raise outcome.error
        return outcome

    async def perform_action(self, action: CompositeAction) -> Any:
        """Run every step of `action` and return its result."""
        while action.has_next():
            await self._step(action)
        return action.result

    async def iterate(self, action: CompositeAction) -> AsyncIterator[Any]:
        """Yield items of a listing action page by page.

        Stopping the iteration stops the requests; nothing needs cleanup.
        """
        while action.has_next():
            await self._step(action)
            for item in action.last_page:
                yield item

    # ── Session facts ──────────────────────────────────────

    async def get_siteinfo(self) -> Siteinfo:
        if self._siteinfo is None:
            self._siteinfo = await self.perform_action(self.build(GetSiteinfo()))
        return self._siteinfo

    async def get_version(self) -> Version:
        if self.context.version is Version.UNKNOWN:
            siteinfo = await self.get_siteinfo()
            self.context.version = siteinfo.version
            self.context.log(f"Negotiated {self.wiki_type} ({siteinfo.generator})")
        return self.context.version

    async def get_userinfo(self, refresh: bool = False) -> Userinfo:
        if self.context.userinfo is None or refresh:
            await self.get_version()
            self.context.userinfo = await self.perform_action(self.build(GetUserinfo()))
        return self.context.userinfo

    async def _prepare(self, handler: ActionHandler, needs_rights: bool = False) -> CompositeAction:
        await self.get_version()
        if needs_rights:
            await self.get_userinfo()
        return self.build(handler)

    # ── Operations ─────────────────────────────────────────

    async def read_content(self, title: str) -> Article:
        handler = ReadPage(title)
        return await self.perform_action(await self._prepare(handler))

    async def write_content(self, article: Article, summary: str = "", minor: bool = False) -> EditResult:
        handler = EditPage(article, summary=summary, minor=minor)
        return await self.perform_action(await self._prepare(handler, needs_rights=True))

    async def delete(self, title: str, reason: Optional[str] = None) -> DeleteResult:
        handler = DeletePage(title, reason)
        return await self.perform_action(await self._prepare(handler, needs_rights=True))

    async def category_members(
        self,
        category: str,
        namespaces: Sequence[int] = (),
    ) -> AsyncIterator[str]:
        action = await self._prepare(CategoryMembers(category, namespaces))
        pages = self.iterate(action)
        try:
            async for title in pages:
                yield title
        finally:
            await pages.aclose()

    async def close(self):
        await self._transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
