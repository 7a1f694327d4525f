"""HTTP surface: gateway/admin callbacks and the HTML render endpoints.

Run with ``python -m socialmeta.server`` (or the ``socialmeta`` script).
Configuration errors abort startup before the server binds.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog
import uvicorn
from fastapi import APIRouter, Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from socialmeta import __version__, callbacks
from socialmeta.config import Settings
from socialmeta.errors import ErrorCode, SocialMetaError
from socialmeta.logging_config import configure_logging
from socialmeta.models.callbacks import WidgetSettings
from socialmeta.models.pages import MetadataKind
from socialmeta.shortcodes import render_shortcode, render_widget
from socialmeta.state import open_app_state

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from socialmeta.state import AppState

log = structlog.get_logger()

ajax = APIRouter(prefix="/ajax", tags=["callbacks"])
pages = APIRouter(tags=["render"])


def _state(request: Request) -> AppState:
    return request.app.state.socialmeta


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@ajax.post("/fb_save_pages")
async def fb_save_pages(request: Request, data: Any = Body(default=None, embed=True)) -> bool:
    return await callbacks.sync_pages(_state(request), data)


@ajax.get("/fb_get_page_options")
async def fb_get_page_options(request: Request, pretty: bool = False):
    result = await callbacks.get_page_options(_state(request))
    if pretty:
        return PlainTextResponse(json.dumps(result, indent=4))
    return JSONResponse(result)


@ajax.post("/fb_save_appdata")
async def fb_save_appdata(request: Request, body: dict[str, Any] | None = Body(default=None)) -> bool:
    return await callbacks.save_app_data(_state(request), body or {})


@ajax.get("/fb_get_app_settings")
async def fb_get_app_settings(request: Request) -> dict[str, Any]:
    settings = await callbacks.get_app_settings(_state(request))
    return settings.model_dump()


@ajax.post("/fb_clear_cache")
async def fb_clear_cache(request: Request) -> bool:
    return await callbacks.clear_cache(_state(request))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@pages.get("/shortcode/{tag}", response_class=HTMLResponse)
async def shortcode(
    request: Request,
    tag: str,
    page_id: str = "",
    empty_message: str | None = None,
) -> str:
    attrs = {"page_id": page_id}
    if empty_message:
        attrs["empty_message"] = empty_message
    return await render_shortcode(_state(request), tag, attrs)


@pages.get("/widget", response_class=HTMLResponse)
async def widget(
    request: Request,
    page_id: str = "",
    title: str = "",
    show_page_name: bool = False,
    kind: MetadataKind = Query(default=MetadataKind.BUSINESS_HOURS),
) -> str:
    settings = WidgetSettings(
        title=title,
        page_id=page_id,
        show_page_name=show_page_name,
        kind=kind,
    )
    return await render_widget(_state(request), settings)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


async def _socialmeta_error_handler(request: Request, exc: SocialMetaError) -> JSONResponse:
    log.info("request_rejected", path=request.url.path, code=exc.code.value)
    return JSONResponse(exc.to_dict(), status_code=400)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = SocialMetaError(ErrorCode.INVALID_INPUT, str(exc.errors()[0].get("msg", "invalid")))
    return await _socialmeta_error_handler(request, error)


def create_app(settings: Settings | None = None, state: AppState | None = None) -> FastAPI:
    """Build the FastAPI app.

    With *state* given the app uses it as-is (tests); otherwise the lifespan
    opens the database and HTTP client from *settings*.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if state is not None:
            app.state.socialmeta = state
            yield
            return
        async with open_app_state(settings or Settings()) as opened:
            app.state.socialmeta = opened
            yield
        log.info("server_stopped")

    app = FastAPI(
        title="socialmeta",
        description="Facebook Page metadata rendered as HTML fragments",
        version=__version__,
        lifespan=lifespan,
    )
    if state is not None:
        app.state.socialmeta = state
    app.include_router(ajax)
    app.include_router(pages)
    app.add_exception_handler(SocialMetaError, _socialmeta_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    return app


def main() -> None:
    settings = Settings()
    configure_logging(settings.logging)
    log.info("server_starting", host=settings.server.host, port=settings.server.port)
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
