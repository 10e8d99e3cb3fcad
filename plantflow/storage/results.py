"""Typed access to the latest run kept in the durable side channel."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from plantflow.domain.entities import PlantConfig
from plantflow.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)

SIMULATION_RESULTS_KEY = "simulationResults"
PLANT_CONFIG_KEY = "plantConfig"
SIMULATION_UNTIL_KEY = "simulationUntil"


class ResultsStore:
    """Holds the latest results and the config that produced them, apart from the graph.

    A run is written key by key; if any write fails, the keys already
    written are restored so the stored results, config and horizon always
    belong to the same run.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save_run(self, config: PlantConfig, results: Dict[str, Any], until: int) -> None:
        entries: List[Tuple[str, Any]] = [
            (SIMULATION_RESULTS_KEY, results),
            (PLANT_CONFIG_KEY, config),
            (SIMULATION_UNTIL_KEY, until),
        ]
        previous = {key: self._store.get(key) for key, _ in entries}

        written: List[str] = []
        try:
            for key, value in entries:
                self._store.put(key, value)
                written.append(key)
        except Exception:
            logger.error("Storing the simulation run failed; restoring %s", ", ".join(written) or "nothing")
            for key in reversed(written):
                self._restore(key, previous[key])
            raise

    def latest_results(self) -> Optional[Dict[str, Any]]:
        return self._store.get(SIMULATION_RESULTS_KEY)

    def latest_config(self) -> Optional[PlantConfig]:
        return self._store.get(PLANT_CONFIG_KEY)

    def latest_until(self) -> Optional[int]:
        return self._store.get(SIMULATION_UNTIL_KEY)

    def _restore(self, key: str, value: Any) -> None:
        if value is None:
            self._store.delete(key)
        else:
            self._store.put(key, value)
