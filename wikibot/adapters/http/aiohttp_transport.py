"""Transport collaborator using aiohttp."""

import asyncio
from typing import Optional
from urllib.parse import urljoin

import aiohttp
from yarl import URL

from wikibot.config import BotConfig
from wikibot.domain.errors import TransportError
from wikibot.domain.models import ActionRequest, HttpMethod

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class AiohttpTransport:
    """Sends ActionRequests to the wiki, one at a time.

    Keeps a single ClientSession so login cookies survive between steps.
    Query strings arrive already percent-encoded and are sent as-is.
    """

    def __init__(
        self,
        config: Optional[BotConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self._config = config or BotConfig.from_env()
        self._session = session
        self._owns_session = session is None

    def url_for(self, request: ActionRequest) -> str:
        base = self._config.url if self._config.url.endswith("/") else self._config.url + "/"
        return urljoin(base, request.path)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self._config.user_agent},
                timeout=aiohttp.ClientTimeout(total=self._config.timeout_seconds),
            )
        return self._session

    async def send(self, request: ActionRequest) -> str:
        session = self._get_session()
        url = self.url_for(request)
        if request.method is HttpMethod.GET:
            call = session.get(URL(f"{url}?{request.query}", encoded=True))
        else:
            call = session.post(
                url,
                data=request.query,
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )

        try:
            async with call as resp:
                # undecodable bytes reach the parser as U+FFFD
                body = await resp.text(errors="replace")
                if resp.status >= 400:
                    raise TransportError(f"HTTP {resp.status}: {body[:200]}", status=resp.status)
                return body
        except aiohttp.ClientError as e:
            raise TransportError(f"{request.method.value} {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"{request.method.value} {url} timed out after {self._config.timeout_seconds}s"
            ) from e

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
