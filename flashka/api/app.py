"""
FastAPI Application - Static kiosk site plus admin endpoints.

Endpoints:
    POST   /upload-images          Store card images (multipart, any field name)
    POST   /shuffle-images         Rotate image_1..image_N.png into a new order
    GET    /admin                  Admin page
    GET    /api/v1/adpack          Today's ad pack and face map (?ad= / ?pack= override, ?pairs=)
    POST   /api/track/{event}      Play/win notification from a kiosk
    GET    /api/track/stats        Tracking tallies since startup
    GET    /health                 Health check
    GET    /*                      Static files from the public directory

Errors are JSON with explicit Pydantic schemas.
Run with: uvicorn --factory flashka.api.app:create_app
"""

from typing import Optional, Union
import logging
import random

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import UploadFile

from .. import __version__
from ..config import Config
from ..games.adpack import PACK_IMAGE_COUNT, select_ad_pack
from ..games.variants import get_variant
from .schemas import (
    AdPackResponse,
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    ShuffleResponse,
    TrackEvent,
    TrackResponse,
    TrackStatsResponse,
    UploadResponse,
)
from .service import AdminService, UploadRejected

logger = logging.getLogger(__name__)


def create_app(service=None, config_class=Config):
    """
    Create the FastAPI application.

    Args:
        service: Optional AdminService instance (creates one over
            config_class.PUBLIC_DIR if not provided)
        config_class: Settings holder, see flashka.config.Config

    Returns:
        FastAPI application instance
    """
    admin_service = service or AdminService(
        public_dir=config_class.PUBLIC_DIR,
        image_count=config_class.SHUFFLE_IMAGE_COUNT,
        rng=random.Random(),
    )
    logger.info("Serving static files from: %s", admin_service.public_dir)
    admin_service.public_dir_ok()
    default_pairs = get_variant(config_class.VARIANT).pair_count

    app = FastAPI(
        title="Flashka Kiosk API",
        description="Static hosting and admin endpoints for the Flashka memory-match kiosk.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config_class.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Incoming request: %s %s", request.method, request.url.path)
        return await call_next(request)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    # =========================================================================
    # Admin Endpoints
    # =========================================================================

    @app.post(
        "/upload-images",
        response_model=UploadResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Admin"],
        summary="Upload card images",
    )
    async def upload_images(request: Request) -> Union[UploadResponse, JSONResponse]:
        """
        Store uploaded card images in the public directory.

        Files may use any form field name. Each must be `image/png` and
        named `image_<n>.png` or `flashka.png`; one bad file rejects the
        whole request.
        """
        form = await request.form()
        uploads = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]

        try:
            for upload in uploads:
                admin_service.validate_upload(upload.filename, upload.content_type)
        except UploadRejected as e:
            return make_error_response(
                ErrorCode.INVALID_UPLOAD,
                str(e),
                details={"files": [u.filename for u in uploads]},
            )

        if not uploads:
            return make_error_response(ErrorCode.NO_FILES, "No valid images were uploaded.")

        stored = []
        for upload in uploads:
            data = await upload.read()
            admin_service.save_upload(upload.filename, data)
            stored.append(upload.filename)

        return UploadResponse(message="Images uploaded successfully!", files=stored)

    @app.post(
        "/shuffle-images",
        response_model=ShuffleResponse,
        responses={500: {"model": ErrorResponse}},
        tags=["Admin"],
        summary="Shuffle image positions",
    )
    async def shuffle_images() -> Union[ShuffleResponse, JSONResponse]:
        """Randomly reassign image_1.png .. image_N.png."""
        try:
            order = admin_service.shuffle_images()
        except OSError as e:
            logger.error("Error shuffling images: %s", e)
            return make_error_response(
                ErrorCode.SHUFFLE_FAILED,
                "Failed to shuffle image positions.",
                status_code=500,
                details={"reason": str(e)},
            )
        return ShuffleResponse(message="Image positions shuffled successfully!", order=order)

    @app.get(
        "/admin",
        responses={404: {"model": ErrorResponse}},
        tags=["Admin"],
        summary="Admin page",
    )
    async def admin_page():
        path = admin_service.admin_page()
        if path is None:
            return make_error_response(ErrorCode.NOT_FOUND, "Admin page not found", status_code=404)
        return FileResponse(path)

    # =========================================================================
    # Game Support Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/adpack",
        response_model=AdPackResponse,
        tags=["Game"],
        summary="Choose the ad pack for the card faces",
    )
    async def get_adpack(
        ad: Optional[str] = Query(None, description="Pack number 1-7"),
        pack: Optional[str] = Query(None, description="adN or a custom folder path"),
        pairs: Optional[int] = Query(
            None, ge=1, le=PACK_IMAGE_COUNT,
            description="Board size for the face map (default: the configured variant)",
        ),
    ) -> AdPackResponse:
        """Weekday rotation in the configured timezone unless overridden."""
        chosen = select_ad_pack(ad=ad, pack=pack, tz=config_class.AD_TIMEZONE)
        return AdPackResponse(
            base=chosen.base,
            front=chosen.front,
            images=chosen.images,
            faces=chosen.face_map(pairs or default_pairs),
        )

    @app.post(
        "/api/track/{event}",
        response_model=TrackResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Tracking"],
        summary="Record a play or win",
    )
    async def track(event: str) -> Union[TrackResponse, JSONResponse]:
        """Request body is ignored; kiosks fire and forget."""
        try:
            track_event = TrackEvent(event)
        except ValueError:
            return make_error_response(
                ErrorCode.NOT_FOUND,
                f"Unknown tracking event: {event}",
                status_code=404,
                details={"valid_events": [e.value for e in TrackEvent]},
            )
        count = admin_service.record_event(track_event.value)
        return TrackResponse(event=track_event, count=count)

    @app.get(
        "/api/track/stats",
        response_model=TrackStatsResponse,
        tags=["Tracking"],
        summary="Tracking tallies",
    )
    async def track_stats() -> TrackStatsResponse:
        return TrackStatsResponse(counts=admin_service.track_counts())

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        ok = admin_service.public_dir_ok()
        return HealthResponse(
            status="healthy" if ok else "degraded",
            service="flashka-kiosk",
            version=__version__,
            public_dir_ok=ok,
        )

    # Static site last so the routes above win
    app.mount(
        "/",
        StaticFiles(directory=admin_service.public_dir, html=True, check_dir=False),
        name="public",
    )

    return app
