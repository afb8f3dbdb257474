from logging import Logger

from starlette.datastructures import UploadFile, FormData
from starlette.requests import Request

from faceswap.errors import ValidationError, UploadTooLargeError
from faceswap.swap.models import ImageAsset, SwapRequest

FIELD_SOURCE = "source"
FIELD_TARGET = "target"

MSG_IMAGES_REQUIRED = "Both source and target images are required"

# room for boundaries and part headers on top of two files
MULTIPART_OVERHEAD = 16 * 1024


def _check_content_length(request: Request, max_size: int) -> None:
    raw_length = request.headers.get("content-length")
    if raw_length is None:
        return

    try:
        content_length = int(raw_length)
    except ValueError:
        raise ValidationError(f"Invalid Content-Length header: '{raw_length}'")

    max_length = 2 * max_size + MULTIPART_OVERHEAD
    if content_length > max_length:
        raise UploadTooLargeError(f"Request body of {content_length} bytes exceeds the limit of {max_length} bytes")


def _get_single_file(form: FormData, field: str) -> UploadFile | None:
    items = form.getlist(field)
    if len(items) > 1:
        raise ValidationError(f"Only one {field} image is allowed")

    if not items or not isinstance(items[0], UploadFile):
        return None
    return items[0]


async def _read_asset(upload: UploadFile, max_size: int) -> ImageAsset | None:
    # the parser already counted the bytes, so oversize files are never copied into the asset
    if upload.size is not None and upload.size > max_size:
        raise UploadTooLargeError(f"File '{upload.filename}' exceeds the limit of {max_size} bytes")

    data = await upload.read()
    if len(data) > max_size:
        raise UploadTooLargeError(f"File '{upload.filename}' exceeds the limit of {max_size} bytes")
    if not data:
        return None

    return ImageAsset(data=data, content_type=upload.content_type or "application/octet-stream",
                      filename=upload.filename or "", size=len(data))


async def read_swap_request(request: Request, max_size: int, logger: Logger,
                            missing_message: str = MSG_IMAGES_REQUIRED) -> SwapRequest:
    """
    Parses multipart form with `source` and `target` files into :class:`SwapRequest`
    :param request: Incoming request
    :param max_size: Max size of a single file in bytes
    :param logger: Request logger
    :param missing_message: Error message used when any of the images is absent
    :return: :class:`SwapRequest` with both images loaded into memory
    :raises ValidationError: when an image is missing, empty or sent more than once
    :raises UploadTooLargeError: when the body is larger than two images can be or an image exceeds `max_size`
    """
    assert max_size > 0, "max_size must be greater than 0"

    _check_content_length(request, max_size)
    async with request.form(max_files=2, max_fields=10) as form:
        source_file = _get_single_file(form, FIELD_SOURCE)
        target_file = _get_single_file(form, FIELD_TARGET)
        if not source_file or not target_file:
            raise ValidationError(missing_message)

        source = await _read_asset(source_file, max_size)
        target = await _read_asset(target_file, max_size)

    if not source or not target:
        raise ValidationError(missing_message)

    logger.info(f"Source: {source.filename}, Size: {source.size}")
    logger.info(f"Target: {target.filename}, Size: {target.size}")
    return SwapRequest(source=source, target=target)
