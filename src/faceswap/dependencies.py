from typing import Annotated

from fastapi.params import Depends
from starlette.requests import Request

from faceswap.config import AppSettings


def get_request_app_settings(request: Request) -> AppSettings:
    return request.app.state.app_settings


AppSettingsDep = Annotated[AppSettings, Depends(get_request_app_settings)]
