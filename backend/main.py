import logging
import sys

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
try:
    from backend.app.config import Settings, load_settings
    from backend.app.errors import register_error_handlers
    from backend.app.models import SearchResult
    from backend.app.services.cache import ExpiringCache
    from backend.app.services.shorts import ShortsService
    from backend.app.services.youtube import YouTubeClient
except ModuleNotFoundError:
    from app.config import Settings, load_settings
    from app.errors import register_error_handlers
    from app.models import SearchResult
    from app.services.cache import ExpiringCache
    from app.services.shorts import ShortsService
    from app.services.youtube import YouTubeClient


logger = logging.getLogger(__name__)


# ---------------------------
# Logging
# ---------------------------

def configure_logging(settings: Settings) -> None:
    if settings.is_production:
        logging.basicConfig(
            level=settings.log_level,
            format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
            stream=sys.stdout,
        )
    else:
        logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------
# Routes
# ---------------------------

router = APIRouter()


def get_shorts_service(request: Request) -> ShortsService:
    return request.app.state.shorts_service


@router.get("/health")
def health(service: ShortsService = Depends(get_shorts_service)):
    return {
        "ok": True,
        "apiKeyConfigured": service.api_key_configured,
        "cacheEntries": len(service.cache),
    }


# Registered before the shorts route so /api/channel/search/shorts is a search.
@router.get("/api/channel/search/{query:path}")
def search_channels(query: str, service: ShortsService = Depends(get_shorts_service)):
    channels = service.search_channels(query)
    return SearchResult(channels=channels).model_dump(by_alias=True)


@router.get("/api/channel/{channel_id}/shorts")
def channel_shorts(channel_id: str, service: ShortsService = Depends(get_shorts_service)):
    return service.get_channel_shorts(channel_id).model_dump(by_alias=True)


# ---------------------------
# App setup
# ---------------------------

def build_shorts_service(settings: Settings) -> ShortsService:
    client = YouTubeClient(settings.youtube_api_key, timeout=settings.youtube_api_timeout)
    return ShortsService(client, ExpiringCache())


def create_app(settings: Settings | None = None, service: ShortsService | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(title="ZikTok API")
    app.state.settings = settings
    app.state.shorts_service = service or build_shorts_service(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.info("Static directory %s not found; serving API only", settings.static_dir)

    @app.on_event("startup")
    def on_startup_report_config():
        logger.info("ZikTok server running on http://localhost:%s", settings.port)
        logger.info("YouTube API key configured: %s", settings.api_key_configured)
        if not settings.api_key_configured:
            logger.warning("YouTube API key not found. Please set YOUTUBE_API_KEY environment variable")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
