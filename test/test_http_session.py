import asyncio
import socket
import unittest

from aiohttp.test_utils import TestServer

from app.leetcode_tracker import fetch_profile, AiohttpGraphQLClient, UpstreamUnavailable
from app.leetcode_tracker import http_session
from app.server import create_app, GRAPHQL_CLIENT_KEY


def unused_url() -> str:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/graphql"


class TestSessionAcrossLoops(unittest.TestCase):

    def tearDown(self):
        asyncio.run(http_session.close_session())

    def test_fetch_profile_in_consecutive_event_loops(self):
        url = unused_url()

        async def lookup():
            with self.assertRaises(UpstreamUnavailable):
                await fetch_profile("alice", client=AiohttpGraphQLClient(url=url))
            return http_session.get_session()

        first = asyncio.run(lookup())
        second = asyncio.run(lookup())

        self.assertIsNot(first, second)

    def test_session_is_shared_within_a_loop(self):
        async def sessions():
            return http_session.get_session(), http_session.get_session()

        first, second = asyncio.run(sessions())

        self.assertIs(first, second)


class TestAppCleanup(unittest.IsolatedAsyncioTestCase):

    async def test_default_client_and_session_cleanup(self):
        app = create_app()
        self.assertIsInstance(app[GRAPHQL_CLIENT_KEY], AiohttpGraphQLClient)

        server = TestServer(app)
        await server.start_server()
        session = http_session.get_session()
        self.assertFalse(session.closed)

        await server.close()

        self.assertTrue(session.closed)
        self.assertIsNone(http_session._session)
