"""FastAPI application exposing the wiki routes."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from wikibot.adapters.web import wiki_routes
from wikibot.config import CONFIG


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await wiki_routes.bot.close()


app = FastAPI(title="wikibot", lifespan=lifespan)
app.include_router(wiki_routes.wiki_router)


def main():
    uvicorn.run(app, host="0.0.0.0", port=CONFIG["port"], log_level="info")


if __name__ == "__main__":
    main()
