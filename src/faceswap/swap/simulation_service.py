from logging import Logger

import anyio

from faceswap.swap.models import SwapRequest, SimulationResult

SIMULATION_MESSAGE = "Simulation complete - Using demo mode"

# 16x16 placeholder jpeg
PLACEHOLDER_IMAGE_URL = (
    "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAYEBQYFBAYGBQYHBwYIChAKCgkJChQODwwQFxQYGBcUFhYaHSUfGhsj"
    "HBYWICwgIyYnKSopGR8tMC0oMCUoKSj/2wBDAQcHBwoIChMKChMoGhYaKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgoKCgo"
    "KCgoKCgoKCj/wAARCAAQABADASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAv/xAAUEAEAAAAAAAAAAAAAAAAAAAAA/8QAFQEBAQAAAAAA"
    "AAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMBAAIRAxEAPwCdABmX/9k="
)


class SimulationService:
    _delay: float
    _logger: Logger

    def __init__(self, delay: float, logger: Logger):
        assert delay >= 0, "delay must not be negative"
        assert logger is not None, "logger is required"

        self._delay = delay
        self._logger = logger

    async def simulate(self, request: SwapRequest) -> SimulationResult:
        assert request is not None, "request is required"

        self._logger.info("Simulation mode activated")
        await anyio.sleep(self._delay)
        return SimulationResult(message=SIMULATION_MESSAGE, image_url=PLACEHOLDER_IMAGE_URL)
