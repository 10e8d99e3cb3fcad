from .interface import KeyValueStore
from .filesystem import FilesystemKeyValueStore
from .results import ResultsStore, SIMULATION_RESULTS_KEY, PLANT_CONFIG_KEY, SIMULATION_UNTIL_KEY

__all__ = [
    "KeyValueStore",
    "FilesystemKeyValueStore",
    "ResultsStore",
    "SIMULATION_RESULTS_KEY",
    "PLANT_CONFIG_KEY",
    "SIMULATION_UNTIL_KEY",
]
