from fastapi import APIRouter

from faceswap import __version__

hc_route = APIRouter()


@hc_route.get("/hc")
@hc_route.get("/health")
def get_health_check() -> dict:
    return {'status': 'ok', 'message': 'FaceSwap API is running', 'version': __version__}
