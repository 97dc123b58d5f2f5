"""Wiki API routes."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from wikibot.bot import MediaWikiBot
from wikibot.domain.errors import (
    ConfigurationError,
    DomainError,
    MalformedResponse,
    TokenError,
    TransportError,
    WikiBotError,
)
from wikibot.domain.models import Article

wiki_router = APIRouter(prefix="/wiki", tags=["Wiki"])

bot = MediaWikiBot()


class PageResponse(BaseModel):
    title: str
    text: str = ""
    user: str = ""
    timestamp: str = ""
    summary: str = ""
    missing: bool = False


class EditRequest(BaseModel):
    title: str
    text: str
    summary: str = ""
    minor: bool = False
    basetimestamp: str = ""


class EditResponse(BaseModel):
    title: str
    result: str
    new_revid: Optional[str] = None
    success: bool


class DeleteRequest(BaseModel):
    title: str
    reason: Optional[str] = None


class DeleteResponse(BaseModel):
    title: str
    reason: Optional[str] = None


class CategoryResponse(BaseModel):
    category: str
    members: List[str]
    truncated: bool = False


class VersionResponse(BaseModel):
    version: str
    wiki_type: str


def _http_error(e: WikiBotError) -> HTTPException:
    if isinstance(e, DomainError):
        return HTTPException(status_code=409, detail={"code": e.code, "info": e.info, "hint": e.hint})
    if isinstance(e, ConfigurationError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, (TokenError, MalformedResponse)):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, TransportError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@wiki_router.get("/version", response_model=VersionResponse)
async def wiki_version():
    try:
        version = await bot.get_version()
    except WikiBotError as e:
        raise _http_error(e) from e
    return VersionResponse(version=version.label, wiki_type=bot.wiki_type)


@wiki_router.get("/page", response_model=PageResponse)
async def read_page(title: str):
    try:
        article = await bot.read_content(title)
    except WikiBotError as e:
        raise _http_error(e) from e
    return PageResponse(**article.__dict__)


@wiki_router.post("/edit", response_model=EditResponse)
async def edit_page(req: EditRequest):
    article = Article(title=req.title, text=req.text, timestamp=req.basetimestamp)
    try:
        result = await bot.write_content(article, summary=req.summary, minor=req.minor)
    except WikiBotError as e:
        raise _http_error(e) from e
    return EditResponse(
        title=result.title,
        result=result.result,
        new_revid=result.new_revid,
        success=result.success,
    )


@wiki_router.post("/delete", response_model=DeleteResponse)
async def delete_page(req: DeleteRequest):
    try:
        result = await bot.delete(req.title, req.reason)
    except WikiBotError as e:
        raise _http_error(e) from e
    return DeleteResponse(title=result.title, reason=result.reason)


@wiki_router.get("/category/{name}", response_model=CategoryResponse)
async def category(name: str, limit: int = 500):
    members: List[str] = []
    truncated = False
    titles = bot.category_members(name)
    try:
        async for title in titles:
            if len(members) >= limit:
                truncated = True
                break
            members.append(title)
    except WikiBotError as e:
        raise _http_error(e) from e
    finally:
        await titles.aclose()
    return CategoryResponse(category=name, members=members, truncated=truncated)
