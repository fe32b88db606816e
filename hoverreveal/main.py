"""FastAPI app factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hoverreveal.config import VERSION, Settings, settings
from hoverreveal.engine.segmentation import Scene, build_scene
from hoverreveal.engine.session import SessionStore
from hoverreveal.imaging.loader import AcquisitionError, load_image_pair
from hoverreveal.models.catalog import CatalogError, ItemCatalog, load_catalog

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.hoverreveal_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def load_scene(cfg: Settings) -> Scene | None:
    """Acquire both images and the catalog, then segment. Raises on any failure."""
    if not cfg.scene_configured:
        logger.warning("No base/overlay image configured, starting without a scene")
        return None
    try:
        if not (cfg.base_image and cfg.overlay_image):
            raise AcquisitionError(
                cfg.base_image or cfg.overlay_image,
                "both base_image and overlay_image must be configured",
            )
        base, overlay = load_image_pair(cfg.base_image, cfg.overlay_image, timeout=cfg.fetch_timeout_s)
        catalog = load_catalog(cfg.catalog_path) if cfg.catalog_path else ItemCatalog()
    except (AcquisitionError, CatalogError) as e:
        logger.error("Scene initialization failed: %s", e)
        raise

    return build_scene(base, overlay, catalog)


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.scene = load_scene(cfg)
        yield

    app = FastAPI(
        title="hoverreveal",
        description="Raster segmentation with pointer hit-testing and hover recolor",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.scene = None
    app.state.sessions = SessionStore(max_sessions=cfg.max_sessions)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from hoverreveal.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
