from collections.abc import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from faceswap.config import AppSettings
from faceswap.main import create_fastapi_app
from faceswap.swap.dependencies import get_http_client

JPEG_BYTES = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9'

ProviderHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    return 'asyncio'


def create_settings(**kwargs) -> AppSettings:
    kwargs.setdefault('static_dir', 'missing-static-dir')
    kwargs.setdefault('simulation_delay', 0)
    kwargs.setdefault('dfl_api_key', 'unit-test-key')
    kwargs.setdefault('provider_url', 'https://provider.test/v1/swap')
    return AppSettings(**kwargs)


def create_app(handler: ProviderHandler | None = None, **kwargs) -> FastAPI:
    app = create_fastapi_app(create_settings(**kwargs))

    async def _get_mock_http_client():
        transport = httpx.MockTransport(handler or (lambda _: httpx.Response(200, content=JPEG_BYTES)))
        async with httpx.AsyncClient(transport=transport) as http_client:
            yield http_client

    app.dependency_overrides[get_http_client] = _get_mock_http_client
    return app


def create_client(handler: ProviderHandler | None = None, **kwargs) -> TestClient:
    return TestClient(create_app(handler, **kwargs), raise_server_exceptions=False)


def image_files(source: bytes = JPEG_BYTES, target: bytes = JPEG_BYTES) -> dict[str, tuple[str, bytes, str]]:
    return {
        'source': ('face.png', source, 'image/png'),
        'target': ('scene.jpg', target, 'image/jpeg'),
    }
