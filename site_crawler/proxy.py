"""site_crawler.proxy: минимальный crawl-прокси на aiohttp.web.

``GET /crawl?url=<target>`` загружает *target* и возвращает его статус, Content-Type
и тело без изменений, добавляя ``Access-Control-Allow-Origin: *``.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator

from aiohttp import ClientError, ClientSession, ClientTimeout, web

from site_crawler.logger import logger

__all__ = ["create_app", "SESSION_KEY"]

SESSION_KEY = web.AppKey("session", ClientSession)
TIMEOUT_KEY = web.AppKey("timeout", float)
_CORS = {"Access-Control-Allow-Origin": "*"}


async def _session_ctx(app: web.Application) -> AsyncIterator[None]:
    app[SESSION_KEY] = ClientSession(timeout=ClientTimeout(total=app[TIMEOUT_KEY]))
    yield
    await app[SESSION_KEY].close()


async def handle_crawl(request: web.Request) -> web.Response:
    target = request.query.get("url", "").strip()
    if not target:
        return web.Response(status=400, text="missing 'url' query parameter", headers=_CORS)
    if "://" not in target:
        target = f"https://{target}"

    session = request.app[SESSION_KEY]
    try:
        async with session.get(target, allow_redirects=True) as upstream:
            body = await upstream.read()
            headers = dict(_CORS)
            ctype = upstream.headers.get("Content-Type")
            if ctype:
                headers["Content-Type"] = ctype
            logger.debug("Proxy %s -> HTTP %d (%d bytes)", target, upstream.status, len(body))
            return web.Response(status=upstream.status, body=body, headers=headers)
    except (ClientError, asyncio.TimeoutError, ValueError) as exc:
        logger.warning("Proxy failed for %s: %s", target, exc)
        return web.Response(status=502, text=f"upstream error: {exc}", headers=_CORS)


def create_app(timeout: float = 10.0) -> web.Application:
    """Создаёт приложение прокси, *timeout* задаёт таймаут запроса к целевому сайту."""
    app = web.Application()
    app[TIMEOUT_KEY] = timeout
    app.cleanup_ctx.append(_session_ctx)
    app.router.add_get("/crawl", handle_crawl)
    return app
