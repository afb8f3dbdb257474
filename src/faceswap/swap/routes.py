from fastapi import APIRouter
from starlette.responses import Response

from faceswap.swap.dependencies import SwapRequestDep, SwapClientDep, SimulationRequestDep, SimulationServiceDep
from faceswap.swap.models import SimulationResult
from faceswap.swap.response_mapper import to_response

swap_router = APIRouter(prefix="/api")


@swap_router.post("/swap")
async def swap_faces(swap_request: SwapRequestDep, swap_client: SwapClientDep) -> Response:
    outcome = await swap_client.swap(swap_request)
    return to_response(outcome)


@swap_router.post("/simulate-swap")
async def simulate_swap(swap_request: SimulationRequestDep,
                        simulation_service: SimulationServiceDep) -> SimulationResult:
    return await simulation_service.simulate(swap_request)
