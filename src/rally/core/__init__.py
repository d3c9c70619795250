from .config import RuntimeConfig, configure_logging, load_runtime_config
from .errors import InsufficientPlayersError, build_forensic_artifact, persist_forensic_artifact
from .events import EventBus
from .ids import make_id, now_utc
from .randomness import PythonRandomSource, draw_random, seeded_random

__all__ = [
    "EventBus",
    "InsufficientPlayersError",
    "PythonRandomSource",
    "RuntimeConfig",
    "build_forensic_artifact",
    "configure_logging",
    "draw_random",
    "load_runtime_config",
    "make_id",
    "now_utc",
    "persist_forensic_artifact",
    "seeded_random",
]
