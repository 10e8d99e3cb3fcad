from fastapi import APIRouter, Depends, Query
from typing import Optional

from plantflow.schemas.api_schemas import AnalysisResponse, SimulationRunResponse
from plantflow.dependencies import get_editor_session, get_simulation_service
from plantflow.application.editor_session import EditorSession
from plantflow.application.simulation_service import SimulationAppService
from plantflow.infrastructure.simulation_client import SimulationReport

router = APIRouter(prefix="/simulation")


def to_run_response(report: SimulationReport) -> SimulationRunResponse:
    return SimulationRunResponse(until=report.until, stats=report.stats, log=report.log)

@router.post("/run", response_model=SimulationRunResponse)
async def run_simulation(
    until: Optional[int] = Query(None, gt=0, description="Simulation horizon in ticks"),
    session: EditorSession = Depends(get_editor_session),
    service: SimulationAppService = Depends(get_simulation_service),
):
    """
    Compile the graph as it is now and run it on the simulation service.
    """
    report = await service.run(session.state, until)
    return to_run_response(report)

@router.get("/results", response_model=SimulationRunResponse)
async def get_results(service: SimulationAppService = Depends(get_simulation_service)):
    """
    Latest results kept in the durable side channel.
    """
    return to_run_response(service.latest_report())

@router.post("/analysis", response_model=AnalysisResponse)
async def analyze_results(service: SimulationAppService = Depends(get_simulation_service)):
    """
    Ask the analysis service for bottlenecks and recommendations on the latest run.
    """
    analysis = await service.analyze()
    return AnalysisResponse(analysis=analysis)
