from starlette import status
from starlette.responses import Response

from faceswap.errors import error_response
from faceswap.swap.models import SwapOutcome, SwapSuccess

HEADER_DISPOSITION = "Content-Disposition"
RESULT_FILE_NAME = "faceswap-result.jpg"
FALLBACK_HINT = "Using simulation mode due to API error"


def to_response(outcome: SwapOutcome) -> Response:
    """ Success is passed through as binary image, failure becomes JSON with a simulation hint """
    if isinstance(outcome, SwapSuccess):
        headers = {HEADER_DISPOSITION: f'attachment; filename="{RESULT_FILE_NAME}"'}
        return Response(content=outcome.image, media_type=outcome.content_type, headers=headers)

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, outcome.message,
                          simulation=True, fallback=FALLBACK_HINT)
