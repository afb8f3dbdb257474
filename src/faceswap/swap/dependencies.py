import uuid
from logging import Logger
from typing import Annotated

import httpx
from fastapi.params import Depends
from loguru import logger
from starlette.requests import Request

from faceswap.dependencies import AppSettingsDep
from faceswap.swap.models import SwapRequest
from faceswap.swap.simulation_service import SimulationService
from faceswap.swap.swap_client import SwapClient, ProviderSwapClient
from faceswap.swap.uploads import read_swap_request

MSG_SIMULATION_IMAGES_REQUIRED = "Both images are required"


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def _get_request_logger(request: Request) -> Logger:
    l = logger.bind(route=request.url.path, request_id=uuid.uuid4().hex[:8])  # type: ignore
    l.debug(f"{request.method} request received")
    return l  # type: ignore


RequestLoggerDep = Annotated[Logger, Depends(_get_request_logger)]


async def _get_swap_request(request: Request, app_settings: AppSettingsDep,
                            request_logger: RequestLoggerDep) -> SwapRequest:
    return await read_swap_request(request, app_settings.max_upload_size, request_logger)


SwapRequestDep = Annotated[SwapRequest, Depends(_get_swap_request)]


async def _get_simulation_request(request: Request, app_settings: AppSettingsDep,
                                  request_logger: RequestLoggerDep) -> SwapRequest:
    return await read_swap_request(request, app_settings.max_upload_size, request_logger,
                                   missing_message=MSG_SIMULATION_IMAGES_REQUIRED)


SimulationRequestDep = Annotated[SwapRequest, Depends(_get_simulation_request)]


def get_swap_client(app_settings: AppSettingsDep, http_client: HttpClientDep,
                    request_logger: RequestLoggerDep) -> SwapClient:
    return ProviderSwapClient(app_settings.provider, http_client, request_logger)


SwapClientDep = Annotated[SwapClient, Depends(get_swap_client)]


def _get_simulation_service(app_settings: AppSettingsDep, request_logger: RequestLoggerDep) -> SimulationService:
    return SimulationService(app_settings.simulation_delay, request_logger)


SimulationServiceDep = Annotated[SimulationService, Depends(_get_simulation_service)]
