"""Domain data models — pure Python dataclasses and enums."""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import total_ordering
from typing import Any, FrozenSet, Optional, Sequence, Tuple, Union
from urllib.parse import quote

from wikibot.domain.errors import WikiBotError

API_PATH = "api.php"
WIRE_FORMAT = "xml"

Params = Tuple[Tuple[str, str], ...]


def encode(value: Any) -> str:
    """Percent-encode a single wire value (titles, reasons, tokens, ...)."""
    return quote(str(value), safe="")


@total_ordering
class Version(Enum):
    """MediaWiki release line the bot negotiated with."""

    UNKNOWN = (0, 0)
    MW1_09 = (1, 9)
    MW1_10 = (1, 10)
    MW1_11 = (1, 11)
    MW1_12 = (1, 12)
    MW1_13 = (1, 13)
    MW1_14 = (1, 14)
    MW1_15 = (1, 15)
    MW1_16 = (1, 16)
    MW1_17 = (1, 17)
    MW1_18 = (1, 18)
    MW1_19 = (1, 19)
    MW1_20 = (1, 20)
    DEVELOPMENT = (99, 0)

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.value < other.value

    @property
    def label(self) -> str:
        if self is Version.UNKNOWN:
            return "unknown"
        if self is Version.DEVELOPMENT:
            return "development"
        return f"{self.value[0]}.{self.value[1]}"

    @classmethod
    def latest(cls) -> "Version":
        return cls.MW1_20

    @classmethod
    def from_generator(cls, generator: str) -> "Version":
        """Map a siteinfo generator string ("MediaWiki 1.18.1") to a Version."""
        match = re.search(r"(\d+)\.(\d+)", generator or "")
        if not match:
            return cls.UNKNOWN
        key = (int(match.group(1)), int(match.group(2)))
        for version in cls:
            if version.value == key:
                return version
        if key > cls.latest().value:
            return cls.DEVELOPMENT
        return cls.UNKNOWN

    @classmethod
    def from_label(cls, label: str) -> "Version":
        """Parse "1.18", "MW1_18" or "development". Raises ValueError."""
        text = label.strip()
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        if text.lower() == "development":
            return cls.DEVELOPMENT
        version = cls.from_generator(text)
        if version is cls.UNKNOWN:
            raise ValueError(f"Unrecognized MediaWiki version: {label!r}")
        return version


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class ActionRequest:
    """One wire request. Parameters keep insertion order; values are raw until encoded."""

    method: HttpMethod
    params: Params
    path: str = API_PATH

    @classmethod
    def build(
        cls,
        method: HttpMethod,
        params: Sequence[Tuple[str, Optional[str]]],
        path: str = API_PATH,
    ) -> "ActionRequest":
        """Drop None-valued params and make sure the wire format is requested."""
        pairs = tuple((key, str(value)) for key, value in params if value is not None)
        if not any(key == "format" for key, _ in pairs):
            pairs += (("format", WIRE_FORMAT),)
        return cls(method=method, params=pairs, path=path)

    def with_params(self, extra: Sequence[Tuple[str, str]]) -> "ActionRequest":
        return replace(self, params=self.params + tuple(extra))

    def get(self, key: str) -> Optional[str]:
        for name, value in self.params:
            if name == key:
                return value
        return None

    @property
    def is_write(self) -> bool:
        return self.method is HttpMethod.POST

    @property
    def query(self) -> str:
        """Percent-encoded key=value pairs joined with '&'."""
        return "&".join(f"{encode(key)}={encode(value)}" for key, value in self.params)


class TokenKind(Enum):
    DELETE = "delete"
    EDIT = "edit"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    scope: str
    value: str = field(repr=False)
    fresh: bool = True

    def spent(self) -> "Token":
        return replace(self, fresh=False)


class SequenceState(Enum):
    AWAITING_TOKEN = "awaiting_token"
    AWAITING_PRIMARY = "awaiting_primary"
    AWAITING_CONTINUATION = "awaiting_continuation"
    DONE = "done"


# ── Step outcomes ──────────────────────────────────────────


@dataclass(frozen=True)
class Continue:
    """More requests remain. `partial` carries one page of a listing, if any."""

    next_state: SequenceState
    partial: Any = None


@dataclass(frozen=True)
class DomainResult:
    value: Any


@dataclass(frozen=True)
class Failed:
    error: WikiBotError


StepOutcome = Union[Continue, DomainResult, Failed]


@dataclass(frozen=True)
class HandlerResult:
    """What an action's success handler extracted from one response."""

    value: Any
    continuation: Params = ()


# ── Wiki values ────────────────────────────────────────────


@dataclass(frozen=True)
class Userinfo:
    name: str
    groups: FrozenSet[str] = frozenset()
    rights: FrozenSet[str] = frozenset()

    def has_right(self, right: str) -> bool:
        return right in self.rights


@dataclass(frozen=True)
class Siteinfo:
    sitename: str
    generator: str
    version: Version


@dataclass
class Article:
    title: str
    text: str = ""
    user: str = ""
    timestamp: str = ""
    summary: str = ""
    missing: bool = False


@dataclass(frozen=True)
class EditResult:
    title: str
    result: str
    new_revid: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.result == "Success"


@dataclass(frozen=True)
class DeleteResult:
    title: str
    reason: Optional[str] = None
