import typing

from pydantic import Field, model_validator
from pydantic.dataclasses import dataclass
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, JsonConfigSettingsSource

ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    """ Connection parameters of the face swap provider """

    url: str
    """ Provider endpoint """

    api_key: str
    """ Bearer token sent with every request """

    timeout: float = 30.0
    """ Hard timeout of a single provider call, in seconds """


class AppSettings(BaseSettings):
    """ Application settings """

    dfl_api_key: str = "dfl_demo_1234567890abcdef"
    """ Provider API key """

    provider_url: str = "https://api.deepfacelab.ai/v1/swap"
    """ Provider endpoint, accepts multipart POST with source and target images """

    provider_timeout: float = 30.0
    """ Provider call timeout in seconds, 30 seconds by default """

    max_upload_size: int = 10 * 1024 * 1024
    """ Max size of a single uploaded image in bytes, 10 MiB by default """

    simulation_delay: float = 2.0
    """ Delay of the simulation endpoint in seconds, 2 seconds by default """

    environment: str = ENV_PRODUCTION
    """ Environment name, production by default. Error details are returned to clients only in development """

    port: int = 3000
    """ Listening port, used when uvicorn.port is not set """

    static_dir: str = "public"
    """ Directory with the frontend files """

    log_level: str = 'info'
    """ Logging level. Options: critical, error, warning, info, debug, trace. Default: info """

    log_fmt: str = "{time} | {level}: {extra} {message}"
    """ Logging message format """

    uvicorn: dict[str, typing.Any] = Field(default_factory=dict[str, typing.Any])
    """ uvicorn specific settings """

    model_config = SettingsConfigDict(env_file=".env", nested_model_default_partial_update=True,
                                      env_nested_delimiter="__", extra='ignore', case_sensitive=False,
                                      json_file="config.json")

    # noinspection PyNestedDecorators
    @model_validator(mode='before')
    @classmethod
    def before_validator(cls, data: typing.Any) -> typing.Any:
        if not isinstance(data, dict):
            return data

        raw_dict = dict(data)
        uvicorn_settings = dict(raw_dict.get('uvicorn', None) or dict[str, typing.Any]())
        uvicorn_settings.setdefault('host', '0.0.0.0')
        uvicorn_settings.setdefault('port', int(raw_dict.get('port', 3000)))
        uvicorn_settings.setdefault('proxy_headers', True)
        raw_dict['uvicorn'] = uvicorn_settings
        return raw_dict

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == ENV_DEVELOPMENT

    @property
    def provider(self) -> ProviderSettings:
        return ProviderSettings(url=self.provider_url, api_key=self.dfl_api_key, timeout=self.provider_timeout)

    @classmethod
    def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, JsonConfigSettingsSource(
            settings_cls), dotenv_settings, file_secret_settings


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if not _app_settings:
        _app_settings = AppSettings()
    return _app_settings
