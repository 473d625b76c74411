import asyncio
import os

import aiohttp

HTTP_TIMEOUT_TOTAL = float(os.getenv("HTTP_TIMEOUT_TOTAL", "30"))
HTTP_TIMEOUT_CONNECT = float(os.getenv("HTTP_TIMEOUT_CONNECT", "10"))
HTTP_TIMEOUT_READ = float(os.getenv("HTTP_TIMEOUT_READ", "20"))
HTTP_POOL_LIMIT = int(os.getenv("HTTP_POOL_LIMIT", "100"))

_session: aiohttp.ClientSession | None = None
_session_loop: asyncio.AbstractEventLoop | None = None


def get_session() -> aiohttp.ClientSession:
    """
    Shared session for the running event loop.
    A session left over from a previous loop is dropped, it cannot be used nor closed from here.
    """
    global _session, _session_loop
    loop = asyncio.get_running_loop()
    if _session and not _session.closed and _session_loop is loop:
        return _session
    timeout = aiohttp.ClientTimeout(
        total=HTTP_TIMEOUT_TOTAL,
        connect=HTTP_TIMEOUT_CONNECT,
        sock_connect=HTTP_TIMEOUT_CONNECT,
        sock_read=HTTP_TIMEOUT_READ
    )
    connector = aiohttp.TCPConnector(limit=HTTP_POOL_LIMIT, ttl_dns_cache=300)
    _session = aiohttp.ClientSession(timeout=timeout, connector=connector)
    _session_loop = loop
    return _session


async def close_session():
    global _session, _session_loop
    if _session and not _session.closed and _session_loop is asyncio.get_running_loop():
        await _session.close()
    _session = None
    _session_loop = None
