"""Application service orchestrating compile, simulation run, result storage and analysis."""
from __future__ import annotations

import logging
from typing import Optional

from plantflow.application.config_compiler import ConfigCompiler, GraphSource
from plantflow.domain.errors import NotFoundError, ValidationError
from plantflow.domain.events import AnalysisCompleted, SimulationCompleted, publish
from plantflow.infrastructure.analysis_client import AIAnalysisClient
from plantflow.infrastructure.simulation_client import SimulationClient, SimulationReport
from plantflow.storage.results import ResultsStore

logger = logging.getLogger(__name__)


class SimulationAppService:
    """Runs the current graph against the simulation service.

    The config is compiled before the first await, so a run reflects the
    graph exactly as it was when triggered. Results go to the results store
    only; the graph is never touched, and a failed request leaves the
    previous results in place.
    """

    def __init__(
        self,
        compiler: ConfigCompiler,
        simulation: SimulationClient,
        analysis: AIAnalysisClient,
        results: ResultsStore,
        default_until: int = 1000,
    ) -> None:
        self._compiler = compiler
        self._simulation = simulation
        self._analysis = analysis
        self._results = results
        self._default_until = default_until

    async def run(self, graph: GraphSource, until: Optional[int] = None) -> SimulationReport:
        until = self._default_until if until is None else until
        if until <= 0:
            raise ValidationError("Simulation horizon 'until' must be a positive number of ticks")

        config = self._compiler.compile(graph)
        if not config["components"]:
            raise ValidationError("The graph is empty; add components before running a simulation")

        logger.info("Running simulation of %d components until %d", len(config["components"]), until)
        report = await self._simulation.run(config, until)

        self._results.save_run(config, report.raw, until)
        publish(SimulationCompleted, "simulation", until=until, component_count=len(report.stats))
        return report

    def latest_report(self) -> SimulationReport:
        results = self._results.latest_results()
        if results is None:
            raise NotFoundError("No simulation results found")
        return SimulationReport.from_document(results, until=self._results.latest_until())

    async def analyze(self) -> str:
        config = self._results.latest_config()
        results = self._results.latest_results()
        if config is None or results is None:
            raise NotFoundError("No simulation results found; run a simulation first")

        analysis = await self._analysis.analyze(config, results)
        publish(AnalysisCompleted, "analysis", length=len(analysis))
        return analysis
