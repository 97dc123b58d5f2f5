"""Version gating: which MediaWiki releases support which action."""

from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, TypeVar

from wikibot.domain.errors import ConfigurationError
from wikibot.domain.models import Version

T = TypeVar("T")


def versions_between(first: Version, last: Version) -> Tuple[Version, ...]:
    """All numbered releases from first to last, inclusive."""
    return tuple(v for v in Version if first <= v <= last)


class CapabilityTable:
    """Action id -> non-empty frozenset of supported versions.

    Filled while action modules are imported, read-only afterwards.
    """

    def __init__(self, entries: Optional[Mapping[str, Iterable[Version]]] = None):
        self._entries: Dict[str, FrozenSet[Version]] = {}
        for action_id, versions in (entries or {}).items():
            self.register(action_id, versions)

    def register(self, action_id: str, versions: Iterable[Version]) -> FrozenSet[Version]:
        supported = frozenset(versions)
        if not supported:
            raise ConfigurationError(
                f"Action {action_id!r} must declare at least one supported version"
            )
        existing = self._entries.get(action_id)
        if existing is not None and existing != supported:
            raise ConfigurationError(f"Action {action_id!r} is already registered")
        self._entries[action_id] = supported
        return supported

    def supported_versions(self, action_id: str) -> FrozenSet[Version]:
        return self._entries.get(action_id, frozenset())

    def is_supported(self, action_id: str, version: Version) -> bool:
        return version in self._entries.get(action_id, frozenset())

    def require(self, action_id: str, version: Version):
        """Raise ConfigurationError unless version supports action_id."""
        if self.is_supported(action_id, version):
            return
        supported = sorted(self.supported_versions(action_id))
        if not supported:
            raise ConfigurationError(f"Unknown action {action_id!r}")
        labels = ", ".join(v.label for v in supported)
        raise ConfigurationError(
            f"Action {action_id!r} is not supported by MediaWiki {version.label} "
            f"(supported: {labels})"
        )

    def __contains__(self, action_id: str) -> bool:
        return action_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


CAPABILITIES = CapabilityTable()


def supported_by(
    *versions: Version,
    table: CapabilityTable = CAPABILITIES,
) -> Callable[[T], T]:
    """Class decorator declaring the versions an action handler works with."""

    def decorator(cls):
        cls.supported_versions = table.register(cls.kind, versions)
        return cls

    return decorator
