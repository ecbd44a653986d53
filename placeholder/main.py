"""FastAPI entrypoint for the placeholder image server."""

import asyncio
import logging
from pathlib import Path
from time import monotonic
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, FastAPI, Header, Query, Request, Response, status
from fastapi.staticfiles import StaticFiles

from placeholder.config import Settings, get_settings
from placeholder.hits import now_ms
from placeholder.imager import render_image
from placeholder.models import SizePair
from placeholder.stats import StatsStore
from placeholder.validation import DimensionValidationError, parse_dimensions, parse_square

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
request_logger = logging.getLogger("placeholder.request")
stats_logger = logging.getLogger("placeholder.stats")

router = APIRouter()


def get_settings_dependency(request: Request) -> Settings:
    return request.app.state.settings


def get_stats_store(request: Request) -> StatsStore:
    return request.app.state.stats_store


def _raw_request_path(request: Request) -> str:
    # Keep percent-encoding as sent by the client; url.path is already decoded.
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").split("?", 1)[0]
    return request.url.path


def _record_request_safely(
    store: StatsStore,
    path: str,
    size: SizePair,
    square: str | None,
    text: str | None,
    referrer: str | None,
    received_at_ms: int,
) -> None:
    # Runs after the image has been sent; failures must never reach the client.
    try:
        store.record_request(path, size, square, text, referrer, received_at_ms)
    except Exception as exc:
        stats_logger.exception("stats_record_failed path=%s error=%s", path, exc)


@router.get("/img/{width}/{height}", tags=["images"])
async def serve_image(
    request: Request,
    background_tasks: BackgroundTasks,
    width: str,
    height: str,
    square: str | None = Query(default=None),
    text: str | None = Query(default=None),
    referrer: str | None = Header(default=None, alias="Referer"),
    app_settings: Settings = Depends(get_settings_dependency),
    store: StatsStore = Depends(get_stats_store),
) -> Response:
    parsed_width, parsed_height = parse_dimensions(
        width,
        height,
        max_dimension=app_settings.max_dimension,
    )
    square_size = parse_square(square)
    received_at_ms = now_ms()

    content = await asyncio.to_thread(render_image, parsed_width, parsed_height, square_size, text)

    background_tasks.add_task(
        _record_request_safely,
        store,
        _raw_request_path(request),
        SizePair(width=parsed_width, height=parsed_height),
        square,
        text,
        referrer,
        received_at_ms,
    )
    return Response(content=content, media_type="image/png")


@router.get("/stats/paths/recent", tags=["stats"])
async def recent_paths(
    app_settings: Settings = Depends(get_settings_dependency),
    store: StatsStore = Depends(get_stats_store),
) -> list[str]:
    return store.recent_paths(app_settings.stats_top_limit)


@router.get("/stats/sizes/recent", tags=["stats"])
async def recent_sizes(
    app_settings: Settings = Depends(get_settings_dependency),
    store: StatsStore = Depends(get_stats_store),
) -> list[dict[str, int]]:
    return store.recent_sizes(app_settings.stats_top_limit)


@router.get("/stats/texts/recent", tags=["stats"])
async def recent_texts(
    app_settings: Settings = Depends(get_settings_dependency),
    store: StatsStore = Depends(get_stats_store),
) -> list[str]:
    return store.recent_texts(app_settings.stats_top_limit)


@router.get("/stats/sizes/top", tags=["stats"])
async def top_sizes(
    app_settings: Settings = Depends(get_settings_dependency),
    store: StatsStore = Depends(get_stats_store),
) -> list[dict[str, int]]:
    return store.top_sizes(app_settings.stats_top_limit)


@router.get("/stats/referrers/top", tags=["stats"])
async def top_referrers(
    app_settings: Settings = Depends(get_settings_dependency),
    store: StatsStore = Depends(get_stats_store),
) -> list[dict[str, Any]]:
    return store.top_referrers(app_settings.stats_top_limit)


@router.get("/stats/hits", tags=["stats"])
async def hit_counts(store: StatsStore = Depends(get_stats_store)) -> list[dict[str, Any]]:
    return store.hit_counts(now_ms())


@router.delete("/stats", tags=["stats"])
async def reset_stats(store: StatsStore = Depends(get_stats_store)) -> Response:
    store.reset_all()
    return Response(status_code=status.HTTP_200_OK)


@router.get("/health", tags=["health"])
async def basic_health(request: Request) -> dict[str, int | str]:
    return {
        "status": "ok",
        "version": request.app.state.settings.app_version,
        "uptime_seconds": int(monotonic() - request.app.state.started_at_monotonic),
    }


def create_app(app_settings: Settings | None = None, store: StatsStore | None = None) -> FastAPI:
    """Build the application with its own settings and stats store."""

    app_settings = app_settings or get_settings()
    application = FastAPI(title=app_settings.app_name, version=app_settings.app_version)
    application.state.settings = app_settings
    application.state.stats_store = store or StatsStore(hit_retention_ms=app_settings.hit_retention_ms)
    application.state.started_at_monotonic = monotonic()

    @application.exception_handler(DimensionValidationError)
    async def dimension_error_handler(request: Request, exc: DimensionValidationError) -> Response:
        request_logger.info(
            "image_request_rejected path=%s status=%s reason=%s",
            request.url.path,
            exc.status_code,
            exc,
        )
        return Response(status_code=exc.status_code)

    @application.middleware("http")
    async def request_logging_middleware(request: Request, call_next: Any) -> Response:
        started = monotonic()
        path = request.url.path
        method = request.method.upper()
        try:
            response = await call_next(request)
        except Exception:
            latency_ms = int((monotonic() - started) * 1000)
            request_logger.exception(
                "request method=%s path=%s status=%s latency_ms=%s",
                method,
                path,
                500,
                latency_ms,
            )
            raise

        latency_ms = int((monotonic() - started) * 1000)
        request_logger.info(
            "request method=%s path=%s status=%s latency_ms=%s",
            method,
            path,
            response.status_code,
            latency_ms,
        )
        return response

    application.include_router(router)

    # Mounted last so it only serves paths no API route matched.
    static_path = Path(app_settings.static_dir)
    if static_path.is_dir():
        application.mount("/", StaticFiles(directory=str(static_path), html=True), name="static")

    return application


app = create_app(settings)


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""

    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
