from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from plantflow.config import settings
from plantflow.domain.registry import EntitySchemaRegistry, registry
from plantflow.application.editor_session import EditorSession
from plantflow.application.simulation_service import SimulationAppService
from plantflow.infrastructure.simulation_client import SimulationClient
from plantflow.infrastructure.analysis_client import AIAnalysisClient
from plantflow.storage.factory import get_storage
from plantflow.storage.results import ResultsStore


def get_entity_registry() -> EntitySchemaRegistry:
    return registry


@lru_cache(maxsize=1)
def get_editor_session() -> EditorSession:
    # One editor per process; the graph lives as long as the server
    return EditorSession(registry=get_entity_registry())


@lru_cache(maxsize=1)
def get_results_store() -> ResultsStore:
    return ResultsStore(get_storage())


def get_simulation_client() -> SimulationClient:
    return SimulationClient(
        url=settings.SIMULATION_SERVICE_URL,
        timeout=settings.SIMULATION_TIMEOUT_SECONDS,
    )


def get_analysis_client() -> AIAnalysisClient:
    return AIAnalysisClient(
        url=settings.ANALYSIS_SERVICE_URL,
        timeout=settings.ANALYSIS_TIMEOUT_SECONDS,
    )


def get_simulation_service(
    session: EditorSession = Depends(get_editor_session),
    results: ResultsStore = Depends(get_results_store),
    simulation: SimulationClient = Depends(get_simulation_client),
    analysis: AIAnalysisClient = Depends(get_analysis_client),
) -> SimulationAppService:
    return SimulationAppService(
        compiler=session.compiler,
        simulation=simulation,
        analysis=analysis,
        results=results,
        default_until=settings.DEFAULT_SIMULATION_UNTIL,
    )
