"""Configuration loaded from the environment (.env supported)."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from wikibot.domain.models import Version

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_timeout(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if value <= 0:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default
    return value


def _env_version(name: str) -> str:
    raw = os.getenv(name, "").strip()
    if not raw:
        return ""
    try:
        Version.from_label(raw)
    except ValueError:
        _stderr_print(f"Unsupported {name}={raw!r}, version will be negotiated via siteinfo")
        return ""
    return raw


CONFIG = {
    # Base URL of the wiki's script path, e.g. https://example.org/w/
    "url": os.getenv("WIKI_URL", "http://localhost/w/"),
    "user_agent": os.getenv("WIKI_USER_AGENT", f"wikibot/{__version__}"),
    "timeout_seconds": _env_timeout("WIKI_TIMEOUT_SECONDS", 30.0),
    # Empty means "ask the wiki" (siteinfo generator)
    "version": _env_version("WIKI_VERSION"),
    "debug": _env_flag("WIKI_DEBUG"),
    "port": int(os.getenv("WIKIBOT_PORT", "8000")),
}


@dataclass
class BotConfig:
    """Typed view of CONFIG handed to MediaWikiBot and the transport."""

    url: str = "http://localhost/w/"
    user_agent: str = f"wikibot/{__version__}"
    timeout_seconds: float = 30.0
    version: str = ""
    debug: bool = False

    @property
    def forced_version(self) -> Optional[Version]:
        if not self.version:
            return None
        return Version.from_label(self.version)

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Create BotConfig from environment variables."""
        return cls(
            url=CONFIG["url"],
            user_agent=CONFIG["user_agent"],
            timeout_seconds=CONFIG["timeout_seconds"],
            version=CONFIG["version"],
            debug=CONFIG["debug"],
        )
