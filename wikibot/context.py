"""Per-session context handed to every component (no process-wide state)."""

import sys
from dataclasses import dataclass, field
from typing import Callable, Optional

from wikibot.config import BotConfig
from wikibot.domain.models import Userinfo, Version


def _stderr_log(msg: str):
    print(msg, file=sys.stderr)


@dataclass
class BotContext:
    """What one bot session knows about its wiki and where it logs.

    Created once per MediaWikiBot; version and userinfo are filled in
    lazily the first time an action needs them.
    """

    version: Version = Version.UNKNOWN
    userinfo: Optional[Userinfo] = None
    debug_enabled: bool = False
    sink: Callable[[str], None] = field(default=_stderr_log, repr=False)

    def log(self, msg: str):
        self.sink(f"[wikibot] {msg}")

    def debug(self, msg: str):
        if self.debug_enabled:
            self.sink(f"[wikibot:debug] {msg}")

    @classmethod
    def from_config(
        cls,
        config: BotConfig,
        sink: Optional[Callable[[str], None]] = None,
    ) -> "BotContext":
        return cls(
            version=config.forced_version or Version.UNKNOWN,
            debug_enabled=config.debug,
            sink=sink or _stderr_log,
        )
