from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette import status

from conftest import create_app, create_client, create_settings
from faceswap import __version__
from faceswap.config import AppSettings
from faceswap.main import create_fastapi_app


@pytest.mark.parametrize('path', ['/health', '/hc'])
def test_health_check(path: str):
    # arrange
    client = create_client()

    # act
    response = client.get(path)

    # assert
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {'status': 'ok', 'message': 'FaceSwap API is running', 'version': __version__}


def test_health_check_does_not_depend_on_provider():
    # arrange
    def handler(_: httpx.Request) -> httpx.Response:
        raise RuntimeError('provider is broken')

    client = create_client(handler)

    # act
    response = client.get('/health')

    # assert
    assert response.status_code == status.HTTP_200_OK
    assert response.json()['status'] == 'ok'


def test_index_is_served(tmp_path: Path):
    # arrange
    (tmp_path / 'index.html').write_text('<html><body>FaceSwap Pro</body></html>')
    (tmp_path / 'app.js').write_text('console.log("faceswap")')
    client = create_client(static_dir=str(tmp_path))

    # act
    index_response = client.get('/')
    script_response = client.get('/app.js')

    # assert
    assert index_response.status_code == status.HTTP_200_OK
    assert index_response.headers['content-type'].startswith('text/html')
    assert 'FaceSwap Pro' in index_response.text
    assert script_response.status_code == status.HTTP_200_OK
    assert 'faceswap' in script_response.text


def test_index_not_found():
    # arrange
    client = create_client()

    # act
    response = client.get('/')

    # assert
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {'error': True, 'message': 'Frontend not found'}


def test_unknown_route():
    # arrange
    client = create_client()

    # act
    response = client.get('/api/unknown')

    # assert
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()['error'] == True


def _create_failing_client(**kwargs) -> TestClient:
    app = create_app(**kwargs)

    @app.get('/api/failing')
    def failing_route():
        raise RuntimeError('unit test error')

    return TestClient(app, raise_server_exceptions=False)


def test_unhandled_error_in_development():
    # arrange
    client = _create_failing_client(environment='development')

    # act
    response = client.get('/api/failing')

    # assert
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {'error': True, 'message': 'Internal server error', 'details': 'unit test error'}


def test_unhandled_error_in_production():
    # arrange
    client = _create_failing_client(environment='production')

    # act
    response = client.get('/api/failing')

    # assert
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {'error': True, 'message': 'Internal server error'}


def test_lifespan_creates_http_client():
    # arrange
    app = create_fastapi_app(create_settings())

    # act & assert
    with TestClient(app) as client:
        assert client.get('/health').status_code == status.HTTP_200_OK
        assert app.state.http_client is not None
        assert not app.state.http_client.is_closed
    assert app.state.http_client.is_closed


def test_unhandled_error_hides_details_by_default(monkeypatch: pytest.MonkeyPatch):
    # arrange
    monkeypatch.delenv('ENVIRONMENT', raising=False)
    app = create_fastapi_app(AppSettings(static_dir='missing-static-dir'))

    @app.get('/api/failing')
    def failing_route():
        raise RuntimeError('db password=secret')

    client = TestClient(app, raise_server_exceptions=False)

    # act
    response = client.get('/api/failing')

    # assert
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {'error': True, 'message': 'Internal server error'}
    assert 'secret' not in response.text
