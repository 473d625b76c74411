import asyncio
import os
from typing import Any, Optional, Protocol

import aiohttp

from app.leetcode_tracker.errors import UpstreamUnavailable
from app.leetcode_tracker.http_session import get_session
from app.logger import logger

LEETCODE_GRAPHQL_URL = os.getenv("LEETCODE_GRAPHQL_URL", "https://leetcode.com/graphql")


class GraphQLClient(Protocol):
    """
    Anything able to run a GraphQL document and return the decoded response.
    Failures should be raised as UpstreamUnavailable, fetch_profile classifies any other exception the same way.
    """

    async def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        ...


class AiohttpGraphQLClient:
    """
    Posts GraphQL documents to the LeetCode endpoint.
    Every transport level problem is raised as UpstreamUnavailable, the
    original detail is kept on the exception for the logs only.
    """

    def __init__(self, url: str = LEETCODE_GRAPHQL_URL, session: Optional[aiohttp.ClientSession] = None):
        self.url = url
        self._session = session

    @property
    def session(self) -> aiohttp.ClientSession:
        return self._session if self._session is not None else get_session()

    async def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        payload = {"query": query, "variables": variables}
        headers = {
            "Content-Type": "application/json",
            "Referer": "https://leetcode.com/",
        }

        try:
            async with self.session.post(self.url, json=payload, headers=headers) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    logger.warning(f"GraphQL request failed with status {resp.status}: {text[:200]}")
                    raise UpstreamUnavailable(detail=f"upstream answered with status {resp.status}")
                data = await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"HTTP error while querying {self.url}: {e}", exc_info=True)
            raise UpstreamUnavailable(detail=str(e)) from e
        except asyncio.TimeoutError as e:
            logger.warning(f"Timeout while querying {self.url}")
            raise UpstreamUnavailable(detail="upstream request timed out") from e
        except ValueError as e:
            logger.error(f"Upstream returned a body that is not JSON: {e}")
            raise UpstreamUnavailable(detail="upstream returned invalid JSON") from e

        if not isinstance(data, dict):
            raise UpstreamUnavailable(detail=f"unexpected response document: {type(data).__name__}")
        return data
