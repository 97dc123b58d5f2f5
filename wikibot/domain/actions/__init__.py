"""Action variants. Importing this package registers their capabilities."""

from wikibot.domain.actions.category import CategoryMembers
from wikibot.domain.actions.delete import DeletePage
from wikibot.domain.actions.edit import EditPage
from wikibot.domain.actions.meta import GetSiteinfo, GetUserinfo
from wikibot.domain.actions.read import ReadPage

__all__ = [
    "CategoryMembers",
    "DeletePage",
    "EditPage",
    "GetSiteinfo",
    "GetUserinfo",
    "ReadPage",
]
