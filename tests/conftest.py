"""
Test configuration and fixtures for plantflow tests.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from plantflow.main import app
from plantflow.dependencies import (
    get_analysis_client,
    get_editor_session,
    get_results_store,
    get_simulation_client,
)
from plantflow.application import event_handlers
from plantflow.application.editor_session import EditorSession
from plantflow.domain.entities import Position
from plantflow.domain.events import event_publisher
from plantflow.domain.graph_state import GraphState
from plantflow.domain.registry import EntitySchemaRegistry
from plantflow.infrastructure.analysis_client import AIAnalysisClient
from plantflow.infrastructure.simulation_client import SimulationClient
from plantflow.storage.filesystem import FilesystemKeyValueStore
from plantflow.storage.results import ResultsStore

SIMULATION_URL = "http://simulator.test/simulate"
ANALYSIS_URL = "http://analysis.test/api/ai-analysis"


def sequential_ids():
    """Deterministic id factory: 000001, 000002, ..."""
    counter = {"value": 0}

    def next_id() -> str:
        counter["value"] += 1
        return f"{counter['value']:06d}"

    return next_id


def stats_response(config):
    """Echo a plausible stats document for each compiled component."""
    stats = {
        component["name"]: {
            "parts_received": 10,
            "parts_sent": 9,
            "throughput": 0.9,
            "avg_latency": 1.5,
            "max_latency": 3.0,
            "utilization_time": 42.0,
        }
        for component in config["components"]
    }
    stats["log"] = "simulation finished"
    return stats


@pytest.fixture(autouse=True)
def clean_event_publisher():
    """Each test starts with no event subscribers."""
    event_publisher.clear_subscribers()
    event_handlers._registered = False
    yield
    event_publisher.clear_subscribers()
    event_handlers._registered = False


@pytest.fixture
def registry():
    return EntitySchemaRegistry()


@pytest.fixture
def state(registry):
    return GraphState(registry, id_factory=sequential_ids())


@pytest.fixture
def session(registry, state):
    return EditorSession(registry=registry, state=state)


@pytest.fixture
def sample_graph(state):
    """Source -> Station -> Drain, as in the basic line scenario."""
    source = state.add_node("source", Position(0, 0))
    station = state.add_node("station", Position(200, 0))
    drain = state.add_node("drain", Position(400, 0))
    state.update_node_properties(source.id, {"interval": "5", "limit": "100"})
    state.update_node_properties(station.id, {"processing_time": "12.5", "capacity": "abc"})
    state.connect(source.id, station.id)
    state.connect(station.id, drain.id)
    return source, station, drain


@pytest.fixture
def results_store(tmp_path):
    return ResultsStore(FilesystemKeyValueStore(base_dir=str(tmp_path / "results")))


@pytest.fixture
def simulator_requests():
    """Requests received by the mocked simulation service."""
    return []


@pytest.fixture
def simulation_transport(simulator_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        simulator_requests.append(request)
        return httpx.Response(200, json=stats_response(json.loads(request.content)))

    return httpx.MockTransport(handler)


@pytest.fixture
def analysis_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"analysis": "Station is the bottleneck."})

    return httpx.MockTransport(handler)


@pytest.fixture
def simulation_client(simulation_transport):
    return SimulationClient(url=SIMULATION_URL, timeout=5.0, transport=simulation_transport)


@pytest.fixture
def analysis_client(analysis_transport):
    return AIAnalysisClient(url=ANALYSIS_URL, timeout=5.0, transport=analysis_transport)


@pytest.fixture
def client(session, results_store, simulation_client, analysis_client):
    """Create test client wired to a fresh editor and mocked services."""
    app.dependency_overrides[get_editor_session] = lambda: session
    app.dependency_overrides[get_results_store] = lambda: results_store
    app.dependency_overrides[get_simulation_client] = lambda: simulation_client
    app.dependency_overrides[get_analysis_client] = lambda: analysis_client
    yield TestClient(app)
    app.dependency_overrides.clear()
