from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .adapters.photos import JsonPlaceholderPhotosAdapter
from .handler import handle_photo_request
from .settings import AppSettings, load_settings

PHOTOS_PATH = "/api/photos"


def _get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _get_photos_adapter(request: Request) -> JsonPlaceholderPhotosAdapter:
    return request.app.state.photos_adapter


def _cache_control(settings: AppSettings) -> str:
    return f"public, max-age={settings.yaml.upstream.revalidate_seconds}"


def create_app(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(application: FastAPI):
        app_settings = settings if settings is not None else load_settings()
        upstream = app_settings.yaml.upstream
        client = httpx.AsyncClient(
            headers={"User-Agent": upstream.user_agent},
            transport=transport,
        )

        application.state.settings = app_settings
        application.state.http_client = client
        application.state.photos_adapter = JsonPlaceholderPhotosAdapter(
            client=client,
            base_url=upstream.base_url,
            revalidate_seconds=upstream.revalidate_seconds,
        )

        try:
            yield
        finally:
            await client.aclose()

    application = FastAPI(title="Photo Carousel", version="0.1.0", lifespan=lifespan)

    @application.get(PHOTOS_PATH, response_class=JSONResponse)
    async def photos(request: Request) -> JSONResponse:
        app_settings = _get_settings(request)
        result = await handle_photo_request(
            request.query_params,
            adapter=_get_photos_adapter(request),
            settings=app_settings,
        )
        headers = {"Cache-Control": _cache_control(app_settings)} if result.status_code == 200 else None
        return JSONResponse(result.body, status_code=result.status_code, headers=headers)

    @application.exception_handler(StarletteHTTPException)
    async def photos_method_not_allowed(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 405 and request.url.path == PHOTOS_PATH:
            return Response(status_code=405, headers={"Allow": "GET"})
        return await http_exception_handler(request, exc)

    @application.get("/health", response_class=JSONResponse)
    async def health(request: Request) -> JSONResponse:
        app_settings = _get_settings(request)
        return JSONResponse(
            {
                "status": "ok",
                "service": "photo-carousel",
                "environment": app_settings.env.carousel_env,
                "upstream_url": _get_photos_adapter(request).base_url,
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            }
        )

    return application


app = create_app()
