from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from rally.contracts import StorageBackend

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True, frozen=True)
class RuntimeConfig:
    root: Path
    storage: StorageBackend = StorageBackend.SQLITE
    seed: int | None = None
    log_level: str = "INFO"


def load_runtime_config(
    env: Mapping[str, str] | None = None,
    *,
    root: Path | None = None,
    storage: StorageBackend | str | None = None,
    seed: int | None = None,
    log_level: str | None = None,
) -> RuntimeConfig:
    """Resolve process-wide settings; explicit arguments win over RALLY_* variables."""
    env = os.environ if env is None else env

    resolved_root = root if root is not None else Path(env.get("RALLY_ROOT", Path.cwd()))

    raw_storage = storage if storage is not None else env.get("RALLY_STORAGE", StorageBackend.SQLITE.value)
    try:
        resolved_storage = StorageBackend(raw_storage)
    except ValueError:
        allowed = ", ".join(b.value for b in StorageBackend)
        raise ValueError(f"unsupported storage backend '{raw_storage}' (expected one of: {allowed})") from None

    resolved_seed = seed
    if resolved_seed is None and env.get("RALLY_SEED"):
        try:
            resolved_seed = int(env["RALLY_SEED"])
        except ValueError:
            raise ValueError(f"RALLY_SEED must be an integer, got '{env['RALLY_SEED']}'") from None

    resolved_level = (log_level or env.get("RALLY_LOG_LEVEL", "INFO")).upper()
    if not isinstance(logging.getLevelName(resolved_level), int):
        raise ValueError(f"unknown log level '{resolved_level}'")

    return RuntimeConfig(root=resolved_root, storage=resolved_storage, seed=resolved_seed, log_level=resolved_level)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
