from abc import ABC, abstractmethod
from logging import Logger

import anyio
import httpx

from faceswap.config import ProviderSettings
from faceswap.swap.models import SwapRequest, SwapOutcome, SwapSuccess, SwapFailure, FailureKind

CONTENT_TYPE_JPEG = "image/jpeg"
_DETAIL_MAX_LEN = 512

_messages: dict[FailureKind, str] = {
    FailureKind.NETWORK_UNREACHABLE: "API server not reachable. Please check your internet connection.",
    FailureKind.NO_RESPONSE: "No response received from API server",
    FailureKind.TIMEOUT: "Request timeout. Please try again.",
    FailureKind.UNKNOWN: "Face swap failed",
}


def failure_message(kind: FailureKind, status_code: int | None = None, reason: str | None = None) -> str:
    if kind != FailureKind.PROVIDER_ERROR:
        return _messages[kind]
    if reason:
        return f"API Error: {status_code} - {reason}"
    return f"API Error: {status_code}"


def _provider_detail(response: httpx.Response) -> str:
    try:
        body = response.text
    except (UnicodeDecodeError, httpx.ResponseNotRead):
        body = f"<{len(response.content)} bytes>"
    return f"{response.reason_phrase}: {body[:_DETAIL_MAX_LEN]}"


def classify_error(exc: BaseException) -> SwapFailure:
    """
    Maps an exception raised while calling the provider to :class:`SwapFailure`
    :param exc: Raised exception
    :return: :class:`SwapFailure`, never raises
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return SwapFailure(kind=FailureKind.TIMEOUT, message=failure_message(FailureKind.TIMEOUT),
                           provider_detail=str(exc) or None)

    if isinstance(exc, httpx.ConnectError):
        return SwapFailure(kind=FailureKind.NETWORK_UNREACHABLE,
                           message=failure_message(FailureKind.NETWORK_UNREACHABLE),
                           provider_detail=str(exc) or None)

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return SwapFailure(kind=FailureKind.PROVIDER_ERROR,
                           message=failure_message(FailureKind.PROVIDER_ERROR, response.status_code,
                                                   response.reason_phrase),
                           status_code=response.status_code,
                           provider_detail=_provider_detail(response))

    if isinstance(exc, httpx.TransportError):
        return SwapFailure(kind=FailureKind.NO_RESPONSE, message=failure_message(FailureKind.NO_RESPONSE),
                           provider_detail=str(exc) or None)

    return SwapFailure(kind=FailureKind.UNKNOWN, message=failure_message(FailureKind.UNKNOWN),
                       provider_detail=str(exc) or type(exc).__name__)


class SwapClient(ABC):
    """
    An abstract interface to face swap provider
    """

    @abstractmethod
    async def swap(self, request: SwapRequest) -> SwapOutcome:
        """
        Sends both images to the provider
        :param request: :class:`SwapRequest` with source and target images
        :return: :class:`SwapSuccess` with the result image or classified :class:`SwapFailure`
        """
        pass


class ProviderSwapClient(SwapClient):
    _settings: ProviderSettings
    _http_client: httpx.AsyncClient
    _logger: Logger

    def __init__(self, settings: ProviderSettings, http_client: httpx.AsyncClient, logger: Logger):
        assert settings is not None, "settings is required"
        assert http_client is not None, "http_client is required"
        assert logger is not None, "logger is required"

        self._settings = settings
        self._http_client = http_client
        self._logger = logger

    @staticmethod
    def _build_files(request: SwapRequest) -> dict[str, tuple[str, bytes, str]]:
        # provider accepts jpeg only, so parts are labelled as jpeg whatever the client sent
        return {
            'source': ('source.jpg', request.source.data, CONTENT_TYPE_JPEG),
            'target': ('target.jpg', request.target.data, CONTENT_TYPE_JPEG),
        }

    def _build_headers(self) -> dict[str, str]:
        return {'Authorization': f"Bearer {self._settings.api_key}", 'Accept': CONTENT_TYPE_JPEG}

    async def _post(self, request: SwapRequest) -> httpx.Response:
        with anyio.fail_after(self._settings.timeout):
            response = await self._http_client.post(self._settings.url, files=self._build_files(request),
                                                    headers=self._build_headers(),
                                                    timeout=self._settings.timeout)
        response.raise_for_status()
        return response

    async def swap(self, request: SwapRequest) -> SwapOutcome:
        self._logger.info("Calling face swap provider")
        try:
            response = await self._post(request)
        except Exception as e:
            failure = classify_error(e)
            self._logger.warning(f"Face swap failed: {failure.kind}, {failure.message}")
            if failure.provider_detail:
                self._logger.debug(f"Provider detail: {failure.provider_detail}")
            return failure

        self._logger.info(f"Provider response received, {len(response.content)} bytes")
        return SwapSuccess(image=response.content, content_type=CONTENT_TYPE_JPEG)
