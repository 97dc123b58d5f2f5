"""Detects the API error node and attaches advisory remediation hints."""

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from wikibot.domain.errors import DomainError
from wikibot.ports.outbound import ResponseNode

if TYPE_CHECKING:
    from wikibot.context import BotContext

ERROR_NODE = "error"

_GRANT_DELETE = (
    "Adding '$wgGroupPermissions['bot']['delete'] = true;' "
    "to your MediaWiki's LocalSettings.php might remove this problem."
)
_ENABLE_WRITE_API = (
    "Adding '$wgEnableWriteAPI = true;' "
    "to your MediaWiki's LocalSettings.php might remove this problem."
)

# Error code -> hint. Extend per wiki through ErrorClassifier(hints=...).
REMEDIATION_HINTS: Mapping[str, str] = MappingProxyType({
    "permissiondenied": _GRANT_DELETE,
    "inpermissiondenied": _GRANT_DELETE,
    "unknown_action": _ENABLE_WRITE_API,
    "writeapidenied": _ENABLE_WRITE_API + " The bot's group also needs the 'writeapi' right.",
    "readapidenied": "The bot's group needs the 'read' right to use the API.",
    "badtoken": "The token is invalid or expired; run the action again to fetch a new one.",
    "protectedpage": "The page is protected; the bot needs the 'editprotected' right.",
    "cantcreate": "The bot's group needs the 'createpage' right.",
    "noedit": "The bot's group needs the 'edit' right.",
})


class ErrorClassifier:
    """Turns an error node into a DomainError; hints never change the error code."""

    def __init__(self, context: "BotContext", hints: Optional[Mapping[str, str]] = None):
        self._context = context
        merged = dict(REMEDIATION_HINTS)
        merged.update(hints or {})
        self._hints = MappingProxyType(merged)

    @property
    def hints(self) -> Mapping[str, str]:
        return self._hints

    def hint_for(self, code: str) -> Optional[str]:
        return self._hints.get(code)

    def extract_error(self, root: ResponseNode) -> Optional[DomainError]:
        node = root if root.name == ERROR_NODE else root.child(ERROR_NODE)
        if node is None:
            return None
        code = node.attr("code") or "unknown"
        info = node.attr("info") or node.text.strip()
        self._context.log(f"API error {code}: {info}")
        hint = self.hint_for(code)
        if hint:
            self._context.log(hint)
        return DomainError(code, info, hint)
