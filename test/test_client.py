import unittest

import aiohttp
from aiohttp import web
from aiohttp.test_utils import TestServer

from app.leetcode_tracker import AiohttpGraphQLClient, UpstreamUnavailable


class TestAiohttpGraphQLClient(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.received: list[dict] = []
        self.status = 200
        self.body = '{"data": {"matchedUser": null}}'

        async def graphql(request: web.Request) -> web.Response:
            self.received.append({"json": await request.json(), "headers": dict(request.headers)})
            return web.Response(status=self.status, text=self.body, content_type="application/json")

        app = web.Application()
        app.router.add_post("/graphql", graphql)
        self.server = TestServer(app)
        await self.server.start_server()
        self.session = aiohttp.ClientSession()
        self.client = AiohttpGraphQLClient(url=str(self.server.make_url("/graphql")), session=self.session)

    async def asyncTearDown(self):
        await self.session.close()
        await self.server.close()

    async def test_posts_query_and_variables(self):
        document = await self.client.execute("query { x }", {"username": "alice"})

        self.assertEqual(document, {"data": {"matchedUser": None}})
        self.assertEqual(len(self.received), 1)
        self.assertEqual(self.received[0]["json"], {"query": "query { x }", "variables": {"username": "alice"}})
        self.assertEqual(self.received[0]["headers"]["Referer"], "https://leetcode.com/")

    async def test_non_success_status(self):
        self.status = 503
        self.body = '{"error": "maintenance"}'

        with self.assertRaises(UpstreamUnavailable) as ctx:
            await self.client.execute("query { x }", {})
        self.assertIn("503", ctx.exception.detail)

    async def test_invalid_json(self):
        self.body = "<html>blocked</html>"

        with self.assertRaises(UpstreamUnavailable):
            await self.client.execute("query { x }", {})

    async def test_non_object_document(self):
        self.body = "[1, 2, 3]"

        with self.assertRaises(UpstreamUnavailable):
            await self.client.execute("query { x }", {})

    async def test_connection_refused(self):
        url = str(self.server.make_url("/graphql"))
        await self.server.close()

        with self.assertRaises(UpstreamUnavailable):
            await AiohttpGraphQLClient(url=url, session=self.session).execute("query { x }", {})
