from aiohttp import web

from app.leetcode_tracker import fetch_profile, GraphQLClient, AiohttpGraphQLClient
from app.leetcode_tracker.http_session import close_session
from app.logger import logger
from app.server.error_handler import error_middleware, cors_middleware

GRAPHQL_CLIENT_KEY = web.AppKey("graphql_client", GraphQLClient)

routes = web.RouteTableDef()


@routes.post("/api/user/{username}")
@routes.get("/api/user/{username}")
async def get_user(request: web.Request) -> web.Response:
    """Look up a LeetCode user and answer with the normalized profile."""
    username = request.match_info["username"]
    profile = await fetch_profile(username, client=request.app[GRAPHQL_CLIENT_KEY])
    return web.json_response(profile)


@routes.get("/api/health")
async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "Server is running"})


async def _on_cleanup(app: web.Application) -> None:
    await close_session()
    logger.info("HTTP session closed.")


def create_app(client: GraphQLClient | None = None) -> web.Application:
    """
    Build the proxy application.
    :param client:
        GraphQL client handed to the fetcher, the shared aiohttp one when omitted.
    """
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[GRAPHQL_CLIENT_KEY] = client or AiohttpGraphQLClient()
    app.add_routes(routes)
    app.on_cleanup.append(_on_cleanup)
    return app
