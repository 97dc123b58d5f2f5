from wikibot.adapters.http.aiohttp_transport import AiohttpTransport

__all__ = ["AiohttpTransport"]
