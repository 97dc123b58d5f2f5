"""Shared fixtures: parsed XML documents, contexts with captured logs, fake transport."""

from typing import List

import pytest

from wikibot.adapters.xml.etree_parser import EtreeParser
from wikibot.context import BotContext
from wikibot.domain.models import Userinfo, Version

BOT_USER = Userinfo(
    name="Bot",
    groups=frozenset({"bot", "user"}),
    rights=frozenset({"read", "edit", "delete", "writeapi"}),
)

READER = Userinfo(name="Reader", groups=frozenset({"user"}), rights=frozenset({"read"}))


@pytest.fixture
def reader() -> Userinfo:
    return READER


@pytest.fixture
def parse():
    return EtreeParser().parse


@pytest.fixture
def log_lines() -> List[str]:
    return []


@pytest.fixture
def context(log_lines) -> BotContext:
    return BotContext(
        version=Version.MW1_18,
        userinfo=BOT_USER,
        debug_enabled=True,
        sink=log_lines.append,
    )


class FakeTransport:
    """Scripted transport: returns bodies in order and records every request."""

    def __init__(self, bodies):
        self._bodies = list(bodies)
        self.requests = []
        self.closed = False

    async def send(self, request):
        self.requests.append(request)
        if not self._bodies:
            raise AssertionError(f"Unexpected request: {request}")
        return self._bodies.pop(0)

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_transport():
    return FakeTransport
