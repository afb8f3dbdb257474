import os

from fastapi import APIRouter
from starlette import status
from starlette.exceptions import HTTPException
from starlette.responses import FileResponse

from faceswap.dependencies import AppSettingsDep

INDEX_FILE = "index.html"

frontend_router = APIRouter()


@frontend_router.get("/", include_in_schema=False)
def get_index(app_settings: AppSettingsDep) -> FileResponse:
    index_path = os.path.join(app_settings.static_dir, INDEX_FILE)
    if not os.path.isfile(index_path):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Frontend not found")

    return FileResponse(index_path, media_type="text/html")
