import uvicorn
from loguru import logger

from faceswap import __version__
from faceswap.config import get_app_settings
from faceswap.main import configure_logger, create_fastapi_app

if __name__ == "__main__":
    app_cfg = get_app_settings()
    configure_logger(app_cfg)

    print(f"faceswap v{__version__}")
    print(f" * provider: {app_cfg.provider_url}\n"
          f" * api key configured: {'yes' if app_cfg.dfl_api_key else 'no'}\n"
          f" * environment: {app_cfg.environment}\n"
          f" * port: {app_cfg.uvicorn['port']}")

    l = logger.bind(source="core")
    l.info("Starting web host")

    web_app = create_fastapi_app(app_cfg)
    uvicorn.run(web_app, **app_cfg.uvicorn)
