"""HTTP adapter for the external discrete-event simulation service."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from plantflow.domain.entities import PlantConfig
from plantflow.domain.errors import NetworkError
from plantflow.schemas.api_schemas import ComponentStats

logger = logging.getLogger(__name__)

LOG_FIELD = "log"


@dataclass
class SimulationReport:
    """Parsed simulation response; ``raw`` is the document as received."""
    stats: Dict[str, ComponentStats]
    log: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)
    until: Optional[int] = None

    @classmethod
    def from_document(cls, document: Any, until: Optional[int] = None) -> SimulationReport:
        if not isinstance(document, dict):
            raise NetworkError("Malformed simulation response: expected a JSON object")

        stats: Dict[str, ComponentStats] = {}
        for name, record in document.items():
            if name == LOG_FIELD:
                continue
            if not isinstance(record, dict):
                raise NetworkError(f"Malformed simulation response: stats for {name} are not an object")
            try:
                stats[name] = ComponentStats.model_validate(record)
            except PydanticValidationError as exc:
                raise NetworkError(f"Malformed simulation response for {name}: {exc}") from exc

        log = document.get(LOG_FIELD)
        if log is not None and not isinstance(log, str):
            log = json.dumps(log, indent=2)
        return cls(stats=stats, log=log, raw=document, until=until)


class SimulationClient:
    """Posts a compiled plant configuration and returns the run's stats."""

    def __init__(
        self,
        url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def run(self, config: PlantConfig, until: int) -> SimulationReport:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self._url, params={"until": until}, json=config)
            except httpx.HTTPError as exc:
                logger.error("Simulation request to %s failed: %s", self._url, exc)
                raise NetworkError(f"Simulation request failed: {exc}") from exc

        if response.is_error:
            logger.error("Simulation service returned %s", response.status_code)
            raise NetworkError(
                f"Simulation service returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            document = response.json()
        except ValueError as exc:
            raise NetworkError("Simulation service returned a non-JSON body") from exc
        return SimulationReport.from_document(document, until=until)
