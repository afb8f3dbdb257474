import os
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from loguru import logger
from starlette.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from faceswap import __version__
from faceswap.config import AppSettings, get_app_settings
from faceswap.errors import register_exception_handlers
from faceswap.frontend.routes import frontend_router
from faceswap.healthcheck.routes import hc_route
from faceswap.swap.routes import swap_router


def configure_logger(app_settings: AppSettings):
    logger.remove()
    logger.add(sys.stdout, level=app_settings.log_level.upper(), format=app_settings.log_fmt)
    logger.add(sys.stderr, level="ERROR", format=app_settings.log_fmt)
    logger.add("logs/log_{time}.log", level=app_settings.log_level.upper(), retention="10 days",
               format=app_settings.log_fmt)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    app_settings: AppSettings = app.state.app_settings
    l = logger.bind(source="core")
    async with httpx.AsyncClient(timeout=app_settings.provider_timeout) as http_client:
        app.state.http_client = http_client
        l.info(f"Provider: {app_settings.provider_url}, API key configured: "
               f"{'Yes' if app_settings.dfl_api_key else 'No'}")
        yield
    l.info("HTTP client closed")


def create_fastapi_app(app_settings: AppSettings | None = None) -> FastAPI:
    app_settings = app_settings or get_app_settings()

    result = FastAPI(lifespan=_lifespan, version=__version__, title="FaceSwap API")
    result.state.app_settings = app_settings
    result.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    register_exception_handlers(result, app_settings)

    result.include_router(hc_route)
    result.include_router(swap_router)
    result.include_router(frontend_router)
    if os.path.isdir(app_settings.static_dir):
        result.mount("/", StaticFiles(directory=app_settings.static_dir), name="static")
    return result
