"""
HTTP transport: JSON request/response on POST /mcp, Server-Sent Events on GET /mcp-stream.

Run:  uv run python -m mathrelay.web [--https]
"""
import argparse
import asyncio
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse

from . import __version__
from .certs import ensure_certificates
from .config import Config, config as default_config
from .errors import CalculatorError, MissingInputError
from .pipeline import iter_stages
from .tools.evaluator import solve_query

logger = logging.getLogger(__name__)


def sse_pack(event: str, data: str) -> str:
    """Format one SSE frame; multi-line data gets one data: field per line."""
    lines = [f"event: {event}"] + [f"data: {line}" for line in str(data).split("\n")]
    return "\n".join(lines) + "\n\n"


async def stream_events(request, query, cfg: Config):
    """Yield SSE frames for one query, stopping early if the client goes away."""
    stages = iter_stages(query, cfg.max_expression_length)
    first = True
    # SymPy work runs off the event loop
    while (stage := await asyncio.to_thread(next, stages, None)) is not None:
        # Stages after the first are staggered for perceived progress
        if not first and stage.event != "done" and cfg.stream_delay:
            await asyncio.sleep(cfg.stream_delay)
        if await request.is_disconnected():
            logger.info("Client disconnected, dropping stream for %r", query)
            return
        yield sse_pack(stage.event, stage.data)
        first = False


def create_app(cfg: Config = None) -> FastAPI:
    cfg = cfg or default_config

    app = FastAPI(
        title="MathRelay",
        description="Natural-language math queries evaluated with SymPy",
        version=__version__,
    )
    app.state.config = cfg

    @app.exception_handler(CalculatorError)
    async def calculator_error_handler(request: Request, exc: CalculatorError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/mcp")
    async def mcp_json(request: Request):
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

        query = body.get("query") if isinstance(body, dict) else None
        if not query:
            raise MissingInputError("Missing query")
        if not isinstance(query, str):
            return JSONResponse(status_code=400, content={"error": "query must be a string"})

        logger.info("Solving query: %r", query)
        return await asyncio.to_thread(solve_query, query, cfg.max_expression_length)

    @app.get("/mcp-stream")
    async def mcp_stream(request: Request, query: str = None):
        return StreamingResponse(
            stream_events(request, query, cfg),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    return app


def main():
    parser = argparse.ArgumentParser(description="MathRelay HTTP/SSE server")
    parser.add_argument("--host", default=default_config.host)
    parser.add_argument("--port", type=int, default=default_config.port)
    parser.add_argument("--https", action="store_true", help="Serve TLS with a self-signed localhost certificate")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, default_config.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ssl_kwargs = {}
    if args.https:
        certfile, keyfile = ensure_certificates(default_config.certs_dir)
        ssl_kwargs = {"ssl_certfile": certfile, "ssl_keyfile": keyfile}

    scheme = "https" if args.https else "http"
    logger.info("MathRelay running at %s://%s:%s", scheme, args.host, args.port)
    logger.info("POST /mcp")
    logger.info("GET  /mcp-stream?query=your-question")
    uvicorn.run(create_app(), host=args.host, port=args.port, **ssl_kwargs)


if __name__ == "__main__":
    main()
