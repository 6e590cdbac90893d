from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

import anyio.to_thread
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import Settings, load_settings
from .errors import CompletionFailed, StoreUnavailable
from .llm.gemini_client import GeminiClient
from .llm.prompts import build_id_prompt, build_order_prompt, build_recommendation_prompt
from .menu.models import MenuItem
from .menu.store import MenuStore, create_store
from .recommendations.cache import PromptCache
from .recommendations.models import ChatRequest, ChatResponse, ErrorResponse, RecommendRequest
from .recommendations.reconcile import filter_by_names, recommend_by_ids

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Dependencies ─────────────────────────────────────────────────────────


def get_store(request: Request) -> MenuStore:
    return request.app.state.store


def get_completion_client(request: Request) -> GeminiClient:
    return request.app.state.completion_client


def get_cache(request: Request) -> PromptCache:
    return request.app.state.cache


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/cache/stats")
def cache_stats(cache: PromptCache = Depends(get_cache)) -> dict:
    return cache.stats()


# ── Menu endpoints ───────────────────────────────────────────────────────


@router.get("/api/menu", response_model=list[MenuItem])
def menu(store: MenuStore = Depends(get_store)) -> list[MenuItem]:
    return store.list_all()


@router.get("/api/menu/filter", response_model=list[MenuItem])
def menu_filter(
    filter: str | None = None,
    store: MenuStore = Depends(get_store),
) -> list[MenuItem]:
    return store.list_filtered(filter)


@router.post("/api/menu/recommend", response_model=list[MenuItem])
def menu_recommend(
    body: RecommendRequest,
    store: MenuStore = Depends(get_store),
    client: GeminiClient = Depends(get_completion_client),
) -> list[MenuItem]:
    menu_items = store.list_all()
    text = client.complete(build_id_prompt(body.prompt, menu_items))
    return recommend_by_ids(text, menu_items, store).items


# ── Chat endpoint ────────────────────────────────────────────────────────


@router.post("/api/chat", response_model=ChatResponse)
def chat(
    body: ChatRequest,
    store: MenuStore = Depends(get_store),
    client: GeminiClient = Depends(get_completion_client),
    cache: PromptCache = Depends(get_cache),
) -> ChatResponse:
    # {message, menu?}: recommend dishes and narrow the menu by name
    if body.message is not None:
        if body.menu is not None:
            rows = body.menu
        else:
            rows = [item.model_dump(mode="json") for item in store.list_all()]
        text = client.complete(build_recommendation_prompt(body.message, rows))
        result = filter_by_names(text, rows)
        return ChatResponse(response=text, recommended_menu=result.items)

    # {prompt}: free-form ordering help, cached by the exact prompt text
    cached = cache.get(body.prompt)
    if cached is not None:
        return ChatResponse(response=cached)

    menu_items = store.list_all()
    text = client.complete(build_order_prompt(body.prompt, menu_items))
    cache.set(body.prompt, text)
    return ChatResponse(response=text)


# ── Error handlers ───────────────────────────────────────────────────────


def _error_response(summary: str, exc: Exception) -> JSONResponse:
    body = ErrorResponse(error=summary, details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


async def _store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("Menu store error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response("Error fetching menu", exc)


async def _completion_failed(request: Request, exc: CompletionFailed) -> JSONResponse:
    logger.error(
        "Completion failed on %s %s (status=%s): %s",
        request.method, request.url.path, exc.status_code, exc,
    )
    return _error_response("Failed to process request", exc)


async def _catch_unhandled(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    # Runs inside CORSMiddleware so the 500 still carries CORS headers
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response("Internal server error", exc)


# ── Application factory ──────────────────────────────────────────────────


def create_app(
    settings: Settings | None = None,
    *,
    store: MenuStore | None = None,
    completion_client: GeminiClient | None = None,
    cache: PromptCache | None = None,
) -> FastAPI:
    """
    Build the API application.

    Collaborators that are not passed in are built from ``settings``, which
    are loaded from the environment when omitted. The menu store is pinged
    during startup; if it cannot be reached the application refuses to start.
    """
    if settings is None and (store is None or completion_client is None or cache is None):
        settings = load_settings()

    if store is None:
        store = create_store(
            settings.database_url,
            table_name=settings.menu_table,
            title_column=settings.menu_title_column,
        )
    if completion_client is None:
        completion_client = GeminiClient(settings.gemini)
    if cache is None:
        cache = PromptCache(ttl_seconds=settings.cache_ttl_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await anyio.to_thread.run_sync(app.state.store.ping)
        except StoreUnavailable:
            logger.critical("Error connecting to menu store, refusing to start", exc_info=True)
            raise
        logger.info("Connected to menu store")
        yield

    app = FastAPI(title="Restaurant Ordering Assistant API", version="1.0.0", lifespan=lifespan)
    # Later middleware wraps earlier middleware: CORS ends up outermost
    app.middleware("http")(_catch_unhandled)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.completion_client = completion_client
    app.state.cache = cache

    app.add_exception_handler(StoreUnavailable, _store_unavailable)
    app.add_exception_handler(CompletionFailed, _completion_failed)

    app.include_router(router)
    return app
