"""
FastAPI web server with the BrooBot REST routes.

Provides:
- Health check
- Tool search, categories, stats and lookup (AI Tool Assistant mode)
- Chat endpoint dispatching to Buddy and Deep Research modes
- CORS middleware for the React frontend
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..clients.completion import create_completion_client
from ..clients.reader import ReaderClient
from ..clients.search import WebSearchClient
from ..config import BrooBotConfig
from ..data import get_categories, get_tool_by_id, get_tool_stats
from ..errors import InvalidArgument
from ..modes import MODE_DESCRIPTORS, BuddyMode, DeepResearch
from ..tools.service import ToolSearchService, create_tool_search_service, to_response
from ..types import ChatMode, SearchOptions
from ..utils.helpers import format_message_response, utc_now_iso
from .auth import User, authenticate, optional_auth

logger = logging.getLogger(__name__)

VALID_MODES = [mode.value for mode in ChatMode]


def _whole_number(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _numeric(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    return value


def parse_search_options(body: Dict[str, Any], default_limit: int = 5) -> SearchOptions:
    """Build SearchOptions from a request body, rejecting malformed values.

    Whole-number floats are accepted for limit and numeric strings for
    minRating.
    """
    limit = _whole_number(body.get("limit") or default_limit)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument("limit must be a positive integer")

    categories = body.get("categories")
    if categories is not None:
        if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
            raise InvalidArgument("categories must be a list of strings")

    min_rating = _numeric(body.get("minRating") or 0)
    if isinstance(min_rating, bool) or not isinstance(min_rating, (int, float)):
        raise InvalidArgument("minRating must be a number")

    return SearchOptions(
        limit=limit,
        categories=categories or None,
        free_only=bool(body.get("freeOnly") or False),
        min_rating=float(min_rating),
    )


def create_app(
    config: Optional[BrooBotConfig] = None,
    tool_service: Optional[ToolSearchService] = None,
    buddy: Optional[BuddyMode] = None,
    research: Optional[DeepResearch] = None,
    cors_origins: Optional[List[str]] = None,
) -> FastAPI:
    """Create the BrooBot FastAPI application.

    Args:
        config: BrooBotConfig (default: environment-derived)
        tool_service: Tool search service override (tests)
        buddy: Buddy mode handler override (tests)
        research: Deep research handler override (tests)
        cors_origins: Allowed CORS origins (default: config.frontend_url)

    Returns:
        FastAPI application instance
    """
    if config is None:
        config = BrooBotConfig.from_env()

    completion = create_completion_client(config)
    reader = ReaderClient(base_url=config.reader_url, timeout=config.scrape_timeout)

    if tool_service is None:
        tool_service = create_tool_search_service(config)
    if buddy is None:
        buddy = BuddyMode(completion)
    if research is None:
        research = DeepResearch(
            search=WebSearchClient(
                api_key=config.serper_api_key,
                url=config.search_url,
                timeout=config.search_timeout,
            ),
            reader=reader,
            client=completion,
            mock_mode=config.mock_mode,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("BrooBot backend starting")
        logger.info(f"Frontend URL: {config.frontend_url}")
        logger.info(f"Claude API: {'configured' if config.anthropic_api_key else 'not configured'}")
        logger.info(f"Serper API: {'configured' if config.serper_api_key else 'not configured (optional)'}")
        logger.info(f"Mock mode: {'enabled' if config.mock_mode else 'disabled'}")
        yield
        logger.info("BrooBot backend stopped")

    app = FastAPI(
        title="BrooBot",
        description="BrooBot chat backend: buddy chat, AI tool search, deep research",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.tool_service = tool_service
    app.state.buddy = buddy
    app.state.research = research

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Not found" if exc.status_code == 404 else exc.detail
        return JSONResponse({"error": message}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}: {exc}")
        return JSONResponse(
            {"error": "Internal server error", "message": str(exc)},
            status_code=500,
        )

    async def _json_body(request: Request) -> Optional[Dict[str, Any]]:
        try:
            body = await request.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    # === REST Endpoints ===

    @app.get("/health")
    async def get_health() -> JSONResponse:
        """Health check."""
        return JSONResponse({
            "status": "healthy",
            "timestamp": utc_now_iso(),
            "mockMode": config.mock_mode,
        })

    @app.post("/api/tools/search")
    async def post_tool_search(
        request: Request,
        user: Optional[User] = Depends(optional_auth),
    ) -> JSONResponse:
        """Rank AI tools for a free-text query."""
        body = await _json_body(request)
        if body is None:
            return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

        query = body.get("query")
        if not query or not isinstance(query, str):
            return JSONResponse({"error": "Query string is required"}, status_code=400)

        try:
            options = parse_search_options(body, config.default_limit)
        except InvalidArgument as e:
            return JSONResponse({"error": str(e)}, status_code=400)

        logger.info(f"Tool search query: \"{query}\"")
        try:
            result = await tool_service.search(query, options)
        except InvalidArgument as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        except Exception as e:
            logger.error(f"Tool search failed: {e}")
            return JSONResponse(
                {"error": "Tool search failed", "message": str(e)},
                status_code=500,
            )
        return JSONResponse(to_response(result))

    @app.get("/api/tools/categories")
    async def get_tool_categories() -> JSONResponse:
        """Categories of the static dataset."""
        categories = get_categories()
        return JSONResponse({"categories": categories, "total": len(categories)})

    @app.get("/api/tools/stats")
    async def get_stats() -> JSONResponse:
        """Static dataset statistics."""
        return JSONResponse(get_tool_stats())

    @app.get("/api/tools/{tool_id}")
    async def get_tool(tool_id: str) -> JSONResponse:
        """Look up a static tool by id."""
        tool = get_tool_by_id(tool_id)
        if tool is None:
            return JSONResponse({"error": "Tool not found"}, status_code=404)
        return JSONResponse({"tool": tool.to_dict()})

    @app.post("/api/chat")
    async def post_chat(request: Request, user: User = Depends(authenticate)) -> JSONResponse:
        """Route a chat request to the mode handler."""
        body = await _json_body(request)
        if body is None:
            return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

        messages = body.get("messages")
        mode = body.get("mode")
        session_id = body.get("sessionId")

        if (
            not messages
            or not isinstance(messages, list)
            or not all(isinstance(m, dict) for m in messages)
        ):
            return JSONResponse({"error": "Messages array is required"}, status_code=400)
        if not mode:
            return JSONResponse({"error": "Mode is required"}, status_code=400)

        if mode == ChatMode.AI_TOOL_ASSISTANT.value:
            return JSONResponse(
                {
                    "error": "AI Tool Assistant uses /api/tools/search endpoint",
                    "hint": 'Use POST /api/tools/search with { query: "your search" }',
                },
                status_code=400,
            )
        if mode not in VALID_MODES:
            return JSONResponse(
                {"error": "Invalid mode", "validModes": VALID_MODES},
                status_code=400,
            )

        logger.info(f"Chat request user={user.id} mode={mode} session={session_id}")
        try:
            if mode == ChatMode.BUDDY.value:
                response = await buddy.handle(messages, user.id, session_id)
            else:
                query = str(messages[-1].get("content", ""))
                result = await research.perform(query, max_sources=config.max_sources)
                response = {
                    "message": format_message_response(
                        result["report"],
                        ChatMode.DEEP_RESEARCH.value,
                        {"sources": result["sources"], **result["metadata"]},
                    ),
                    "sessionId": session_id,
                }
        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            return JSONResponse(
                {"error": "Failed to process chat request", "message": str(e)},
                status_code=500,
            )
        return JSONResponse(response)

    @app.get("/api/chat/modes")
    async def get_modes() -> JSONResponse:
        """Available chat modes."""
        return JSONResponse({"modes": MODE_DESCRIPTORS})

    return app
