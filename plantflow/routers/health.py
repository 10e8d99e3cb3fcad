"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime

from plantflow.config import settings
from plantflow.dependencies import get_editor_session, get_results_store
from plantflow.application.editor_session import EditorSession
from plantflow.storage.results import ResultsStore

router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/storage")
async def storage_health(
    results: ResultsStore = Depends(get_results_store)
) -> Dict[str, Any]:
    """
    Check results storage health.
    Verifies the store answers reads for the latest run.
    """
    try:
        has_results = results.latest_results() is not None

        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "storage_type": settings.STORAGE_TYPE,
            "has_results": has_results,
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }

@router.get("/health/detailed")
async def detailed_health(
    results: ResultsStore = Depends(get_results_store),
    session: EditorSession = Depends(get_editor_session)
) -> Dict[str, Any]:
    """
    Detailed health check of all system components.
    """
    storage_health_check = await storage_health(results)  # type: ignore[arg-type]
    basic_health = await health_check()
    snapshot = session.state.snapshot()

    return {
        "status": storage_health_check.get("status", "healthy"),
        "timestamp": datetime.now().isoformat(),
        "api": basic_health,
        "storage": storage_health_check,
        "graph": {
            "nodes": len(snapshot.nodes),
            "edges": len(snapshot.edges),
        },
        "config": {
            "storage_type": settings.STORAGE_TYPE,
            "simulation_service_url": settings.SIMULATION_SERVICE_URL,
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG
        }
    }
