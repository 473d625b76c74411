from aiohttp import web

from app.leetcode_tracker import FetchError, UpstreamUnavailable
from app.logger import logger

GENERIC_ERROR = UpstreamUnavailable.message


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except FetchError as error:
        if error.http_status >= 500:
            logger.error(f"{request.method} {request.path} failed for {error.identifier!r}: {error.detail}")
        else:
            logger.info(f"{request.method} {request.path} -> {error.http_status}: {error.message}")
        return web.json_response({"error": error.message}, status=error.http_status)
    except Exception as e:
        logger.error(f"Unhandled error in {request.method} {request.path}: {e}", exc_info=True, stack_info=True)
        return web.json_response({"error": GENERIC_ERROR}, status=500)


@web.middleware
async def cors_middleware(request: web.Request, handler):
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        try:
            response = await handler(request)
        except web.HTTPException as exc:
            exc.headers.update(_cors_headers(request))
            raise
    response.headers.update(_cors_headers(request))
    return response


def _cors_headers(request: web.Request) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": request.headers.get("Access-Control-Request-Headers", "Content-Type"),
    }
