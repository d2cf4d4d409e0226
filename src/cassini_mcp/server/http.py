"""HTTP transport — one JSON-RPC request per ``POST`` body.

Built on Starlette and served by uvicorn::

    app = create_app(dispatcher, repository)
    uvicorn.run(app, host="127.0.0.1", port=8000)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

if TYPE_CHECKING:
    from starlette.requests import Request

    from cassini_mcp.data.repository import ObservationRepository
    from cassini_mcp.protocol.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


def create_app(
    dispatcher: RequestDispatcher,
    repository: ObservationRepository,
    *,
    path: str = "/mcp",
) -> Starlette:
    """Build the ASGI application.

    Routes:
        ``POST {path}`` — JSON-RPC endpoint; always answers 200 with a
        JSON-RPC response body.
        ``GET /health`` — database connectivity check with the record count.
    """

    async def mcp_endpoint(request: Request) -> Response:
        body = await request.body()
        logger.info("Received MCP request at %s", request.url.path)
        payload = await dispatcher.handle(body)
        return Response(content=payload, media_type="application/json")

    async def health(request: Request) -> Response:
        try:
            count = await repository.get_count()
        except Exception as exc:
            logger.error("Database connection failed: %s", exc)
            return JSONResponse(
                {"status": "unavailable", "detail": str(exc)},
                status_code=503,
            )
        return JSONResponse({"status": "connected", "total_records": count})

    return Starlette(
        routes=[
            Route(path, mcp_endpoint, methods=["POST"]),
            Route("/health", health, methods=["GET"]),
        ],
    )


def serve_http(app: Starlette, host: str, port: int, log_level: str = "info") -> None:
    """Run *app* under uvicorn until interrupted."""
    import uvicorn

    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
