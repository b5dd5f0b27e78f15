from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging, time

from config import settings
from api.router import router as api_router
from services.weather import weather_service

logger = logging.getLogger("pws.hub")
if not logger.handlers:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
# httpx logs full request URLs at INFO, query string (and apiKey) included.
logging.getLogger("httpx").setLevel(logging.WARNING)


def resolve_static_file(static_root: Path, request_path: str) -> Path | None:
    """Map a request path onto a file inside ``static_root``, or None."""
    root = static_root.resolve()
    candidate = (root / request_path.lstrip("/")).resolve()
    if not candidate.is_relative_to(root):
        return None
    if candidate.is_file():
        return candidate
    return None


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version=settings.app_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        dur_ms = (time.perf_counter() - start) * 1000.0
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, dur_ms)
        return response

    @app.get("/health", tags=["meta"])
    async def health():
        return JSONResponse({"status": "ok", "version": settings.app_version})

    app.include_router(api_router)

    # Registered last so every route above wins over the front-end fallback.
    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        static_root = Path(settings.static_dir)
        target = resolve_static_file(static_root, full_path)
        if target is not None:
            return FileResponse(target)
        index = static_root / "index.html"
        if index.is_file():
            return FileResponse(index)
        return JSONResponse({"detail": "Not Found"}, status_code=404)

    @app.on_event("startup")
    async def _startup():
        if not settings.weather_key:
            logger.warning("WEATHER_KEY is not set; upstream weather requests will be rejected.")
        logger.info("Default station %s, static files from %s", settings.weather_station_id, settings.static_dir)

    @app.on_event("shutdown")
    async def _shutdown():
        await weather_service.close()

    return app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
