"""HTTP adapter for the AI analysis proxy."""
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from plantflow.domain.entities import PlantConfig
from plantflow.domain.errors import NetworkError

logger = logging.getLogger(__name__)


class AIAnalysisClient:
    """Sends ``{plantConfig, simulationResults}`` and returns the analysis text."""

    def __init__(
        self,
        url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def analyze(self, plant_config: PlantConfig, simulation_results: Dict[str, Any]) -> str:
        payload = {"plantConfig": plant_config, "simulationResults": simulation_results}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self._url, json=payload)
            except httpx.HTTPError as exc:
                logger.error("Analysis request to %s failed: %s", self._url, exc)
                raise NetworkError(f"Analysis request failed: {exc}") from exc

        body = self._json_or_empty(response)
        if response.is_error:
            message = body.get("error") or f"Server error: {response.status_code}"
            logger.error("Analysis service returned %s: %s", response.status_code, message)
            raise NetworkError(str(message), status_code=response.status_code)

        analysis = body.get("analysis")
        if not isinstance(analysis, str) or not analysis:
            raise NetworkError("No analysis text received from the analysis service")
        return analysis

    @staticmethod
    def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
